"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    ServiceValidationError,
    NoCandidatesError,
    InsufficientCandidatesError,
    NotFoundError,
    ForbiddenError,
    ConflictError,
)

__all__ = [
    "settings",
    "ServiceValidationError",
    "NoCandidatesError",
    "InsufficientCandidatesError",
    "NotFoundError",
    "ForbiddenError",
    "ConflictError",
]
