# app/core/exceptions.py
from typing import Optional


class TaskError(Exception):
    """Base class for errors raised by the task service."""


class ValidationError(TaskError):
    """A required field is missing or blank."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(TaskError):
    """The referenced task id does not exist."""


class InternalError(TaskError):
    """Unexpected failure; the original exception is kept as __cause__."""
