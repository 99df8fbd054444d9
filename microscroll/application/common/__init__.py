"""
Application common module.

Contains base classes for application layer:
- Result: Result type for use case outcomes
- UnitOfWork: Transaction boundary port with conflict retries
"""

from .result import Failure, Result, Success
from .unit_of_work import ConcurrentUpdateError, UnitOfWork

__all__ = [
    "ConcurrentUpdateError",
    "Failure",
    "Result",
    "Success",
    "UnitOfWork",
]
