from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ConflictError(DomainError):
    """Raised when an operation clashes with the current state (double clock-in, already closed...)."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""
