"""
Infrastructure layer.

Implementations of the application ports:

- Persistence (SQLAlchemy repositories, mappers, unit of work)
- Web framework (FastAPI routers, schemas, error envelope)
- Identity (bearer token verification)

This layer depends on domain and application layers,
but they do not depend on it.
"""
