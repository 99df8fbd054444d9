"""
Domain layer.

The core business logic of the study engine, with no dependencies on
frameworks or infrastructure:
- Entities and aggregate roots (CardProgress, StudySession)
- Value objects (typed ids, content hashes)
- Domain services (scheduling, due selection, streaks)
"""
