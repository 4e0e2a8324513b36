"""Task lifecycle statuses and the file each one is stored in.

The declaration order of TaskStatus is the canonical order: listing
every task walks the status files in this order.
"""

from __future__ import annotations

from enum import Enum

from mdtasks.errors import InvalidStatusError


class TaskStatus(Enum):
    """Task lifecycle states. Any state may move to any other."""

    BACKLOG = "backlog"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    ARCHIVED = "archived"


STATUS_TO_FILE: dict[TaskStatus, str] = {
    TaskStatus.BACKLOG: "backlog.md",
    TaskStatus.IN_PROGRESS: "in-progress-tasks.md",
    TaskStatus.COMPLETE: "completed-tasks.md",
    TaskStatus.ARCHIVED: "archive-tasks.md",
}

VALID_STATUSES: tuple[str, ...] = tuple(s.value for s in TaskStatus)


def parse_status(status: TaskStatus | str) -> TaskStatus:
    """Return the TaskStatus for a status value.

    Raises:
        InvalidStatusError: If status is not one of VALID_STATUSES
    """
    if isinstance(status, TaskStatus):
        return status
    try:
        return TaskStatus(status)
    except ValueError as e:
        raise InvalidStatusError(status) from e


def file_for_status(status: TaskStatus | str) -> str:
    """Get the file name that stores tasks with this status."""
    return STATUS_TO_FILE[parse_status(status)]
