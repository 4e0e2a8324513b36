#!/usr/bin/env python3
"""Task service: list, create, update, delete and reserialize tasks.

Tasks have no ids. A task is addressed by its status and its index in
that status's list as read at the start of the call; the address is only
good for that one read-modify-write cycle.

Changing a task's status moves it to the end of the destination list.
The destination file is written before the task is removed from the
source file, so a failure between the two writes leaves the task in both
files instead of neither.

Usage:
    from mdtasks.task_service import TaskService

    service = TaskService.from_folder(Path("tasks"))
    task = service.create({"title": "Write docs"})
    service.update_by_index("backlog", 0, {"status": "in-progress"})
    service.delete_by_index("in-progress", 0)

Module-level functions taking a folder (list_all, create, ...) wrap a
one-off service for callers that do not keep one around.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mdtasks.paths import get_tasks_folder
from mdtasks.task_codec import ParseResult, parse, serialize_all
from mdtasks.task_model import Task, TaskFields, TaskUpdate
from mdtasks.task_status import TaskStatus, parse_status
from mdtasks.task_storage import FolderTaskFiles, TaskFiles

logger = logging.getLogger(__name__)


@dataclass
class ReserializeReport:
    """Outcome of rewriting every status file."""

    kept: dict[TaskStatus, int] = field(default_factory=dict)
    dropped: dict[TaskStatus, int] = field(default_factory=dict)

    @property
    def total_kept(self) -> int:
        return sum(self.kept.values())

    @property
    def total_dropped(self) -> int:
        return sum(self.dropped.values())


class TaskService:
    """Task operations over a set of status files."""

    def __init__(self, files: TaskFiles):
        self.files = files

    @classmethod
    def from_folder(cls, folder: Path | str) -> TaskService:
        return cls(FolderTaskFiles(folder))

    @classmethod
    def from_env(cls) -> TaskService:
        """Build a service on the folder named by $MDTASKS_DATA."""
        return cls.from_folder(get_tasks_folder())

    def load(self, status: TaskStatus | str) -> ParseResult:
        """Read and parse one status file."""
        status = parse_status(status)
        return parse(self.files.read(status), status)

    def _save(self, status: TaskStatus, tasks: list[Task]) -> None:
        self.files.write(status, serialize_all(tasks))

    def list_all(self, status: TaskStatus | str | None = None) -> list[Task]:
        """List tasks from every status file, in canonical status order.

        Args:
            status: Only list tasks with this status

        Returns:
            Tasks ordered by status, then by position within the file
        """
        statuses = list(TaskStatus) if status is None else [parse_status(status)]
        self.files.ensure()
        tasks: list[Task] = []
        for s in statuses:
            tasks.extend(self.load(s).tasks)
        return tasks

    def create(self, fields: dict[str, Any] | TaskFields) -> Task:
        """Append a new task to the end of its status file.

        Raises:
            TaskValidationError: If the payload is invalid (e.g. blank title)
            InvalidStatusError: If the status is unknown
        """
        payload = TaskFields.from_payload(fields)
        status = parse_status(payload.status)
        task = payload.to_task(status)

        self.files.ensure()
        tasks = self.load(status).tasks
        tasks.append(task)
        self._save(status, tasks)
        logger.info("Created task %r in %s at index %d", task.title, status.value, len(tasks) - 1)
        return task

    def update_by_index(
        self,
        status: TaskStatus | str,
        index: int,
        updates: dict[str, Any] | TaskUpdate,
    ) -> Task | None:
        """Merge updates into the task at (status, index).

        Fields not in updates keep their value. If the status changes, the
        task moves to the end of the destination list.

        Returns:
            The updated task, or None if index is out of range (nothing written)

        Raises:
            InvalidStatusError: If status, or the updated status, is unknown
            TaskValidationError: If updates is invalid
        """
        source = parse_status(status)
        update = TaskUpdate.from_payload(updates)

        self.files.ensure()
        tasks = self.load(source).tasks
        if not 0 <= index < len(tasks):
            logger.debug("No task at %s[%d] (%d tasks)", source.value, index, len(tasks))
            return None

        updated = tasks[index].merged(update)

        if updated.status == source:
            tasks[index] = updated
            self._save(source, tasks)
            logger.info("Updated task %r at %s[%d]", updated.title, source.value, index)
            return updated

        destination = updated.status
        dest_tasks = self.load(destination).tasks
        dest_tasks.append(updated)
        self._save(destination, dest_tasks)

        del tasks[index]
        self._save(source, tasks)
        logger.info(
            "Moved task %r from %s[%d] to %s[%d]",
            updated.title,
            source.value,
            index,
            destination.value,
            len(dest_tasks) - 1,
        )
        return updated

    def delete_by_index(self, status: TaskStatus | str, index: int) -> bool:
        """Delete the task at (status, index).

        Returns:
            True if deleted, False if index is out of range (nothing written)

        Raises:
            InvalidStatusError: If status is unknown
        """
        status = parse_status(status)

        self.files.ensure()
        tasks = self.load(status).tasks
        if not 0 <= index < len(tasks):
            logger.debug("No task at %s[%d] (%d tasks)", status.value, index, len(tasks))
            return False

        removed = tasks.pop(index)
        self._save(status, tasks)
        logger.info("Deleted task %r at %s[%d]", removed.title, status.value, index)
        return True

    def reserialize_all(self) -> ReserializeReport:
        """Rewrite every status file in canonical form.

        Only blocks that parse are written back, so malformed blocks and
        any text outside blocks are removed for good.
        """
        self.files.ensure()
        report = ReserializeReport()
        for status in TaskStatus:
            result = self.load(status)
            self._save(status, result.tasks)
            report.kept[status] = len(result.tasks)
            report.dropped[status] = result.skipped_count
            if result.skipped:
                logger.warning(
                    "Dropped %d malformed block(s) from %s", result.skipped_count, status.value
                )
        return report


def list_all(folder: Path | str, status: TaskStatus | str | None = None) -> list[Task]:
    return TaskService.from_folder(folder).list_all(status)


def create(folder: Path | str, fields: dict[str, Any] | TaskFields) -> Task:
    return TaskService.from_folder(folder).create(fields)


def update_by_index(
    folder: Path | str,
    status: TaskStatus | str,
    index: int,
    updates: dict[str, Any] | TaskUpdate,
) -> Task | None:
    return TaskService.from_folder(folder).update_by_index(status, index, updates)


def delete_by_index(folder: Path | str, status: TaskStatus | str, index: int) -> bool:
    return TaskService.from_folder(folder).delete_by_index(status, index)


def reserialize_all(folder: Path | str) -> ReserializeReport:
    return TaskService.from_folder(folder).reserialize_all()
