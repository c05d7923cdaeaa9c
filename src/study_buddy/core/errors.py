# src/study_buddy/core/errors.py

from __future__ import annotations


class ValidationError(ValueError):
    """User input rejected at the UI boundary (blank fields, bad due date)."""


class PersistenceFailure(RuntimeError):
    """Durable backend read/write failed."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
