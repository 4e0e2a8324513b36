"""Exception types raised by mdtasks."""

from __future__ import annotations

from typing import Any


class MdTasksError(Exception):
    """Base class for mdtasks errors."""


class InvalidStatusError(MdTasksError, ValueError):
    """Raised when a status is not one of the known lifecycle statuses."""

    def __init__(self, status: Any):
        super().__init__(f"Invalid status: {status}")
        self.status = status


class TaskValidationError(MdTasksError, ValueError):
    """Raised when a create or update payload does not validate."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []
