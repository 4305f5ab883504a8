from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EntityNotFoundError(DomainError):
    """Raised when a referenced id does not exist."""


class DatabaseError(DomainError):
    """Raised when the persistence layer failed.

    Carries a generic message; the cause is only logged.
    """
