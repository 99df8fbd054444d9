from .card_progress_mapper import CardProgressMapper
from .study_session_mapper import StudySessionMapper

__all__ = ["CardProgressMapper", "StudySessionMapper"]
