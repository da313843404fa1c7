"""Exceptions raised by the memento service layer."""

from __future__ import annotations


class MementoError(Exception):
    """Base class for all memento errors."""


class ValidationError(MementoError):
    """Raised when user input cannot become a valid record."""


class RecordNotFoundError(MementoError):
    """Raised when an operation targets an id that is not stored."""


class PersistenceError(MementoError):
    """Raised when the record store reports a failed write."""
