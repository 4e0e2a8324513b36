#!/usr/bin/env python3
"""Status file storage: one markdown file per status in a tasks folder.

Directory Structure:
    <tasks folder>/
    ├── backlog.md
    ├── in-progress-tasks.md
    ├── completed-tasks.md
    └── archive-tasks.md

Every write replaces a whole file. There is no append path and no
locking: two writers racing on the same file lose one update.

Usage:
    from mdtasks.task_storage import FolderTaskFiles

    files = FolderTaskFiles(Path("~/tasks").expanduser())
    files.ensure()
    text = files.read(TaskStatus.BACKLOG)
    files.write(TaskStatus.BACKLOG, text)
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, Protocol

from mdtasks.task_codec import serialize_all
from mdtasks.task_model import Task
from mdtasks.task_status import STATUS_TO_FILE, TaskStatus, file_for_status

logger = logging.getLogger(__name__)


class TaskFiles(Protocol):
    """Raw text access to the four status files.

    The service depends on this protocol only, so tests can swap the
    folder for an in-memory fake.
    """

    def ensure(self) -> None: ...

    def read(self, status: TaskStatus | str) -> str: ...

    def write(self, status: TaskStatus | str, text: str) -> None: ...


def ensure_data_files(folder: Path) -> None:
    """Create the tasks folder and any missing status file (empty).

    Idempotent: existing files are left untouched.
    """
    folder.mkdir(parents=True, exist_ok=True)
    for filename in STATUS_TO_FILE.values():
        path = folder / filename
        if not path.exists():
            path.write_text("", encoding="utf-8")
            logger.info("Created status file %s", path)


def read_text(path: Path) -> str:
    """Read a status file; a missing file reads as empty."""
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def atomic_write(path: Path, content: str) -> bool:
    """Overwrite a file's whole content atomically.

    Writes to a temp file in the same directory, then renames it over the
    target. The target's permission bits are kept (a new file gets the
    usual umask-based mode rather than mkstemp's 0600). No-op if the
    content is unchanged.

    Returns:
        True if the file was written, False if it was already up to date
    """
    if path.exists() and path.read_text(encoding="utf-8") == content:
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.touch()

    # Temp file in the same directory so the rename stays on one filesystem
    fd, temp_path = tempfile.mkstemp(
        suffix=".tmp",
        prefix=path.stem + "_",
        dir=path.parent,
    )
    try:
        os.close(fd)
        temp = Path(temp_path)
        temp.write_text(content, encoding="utf-8")
        shutil.copymode(path, temp)
        temp.replace(path)
    except Exception:
        Path(temp_path).unlink(missing_ok=True)
        raise
    return True


def write_tasks(path: Path, tasks: Iterable[Task]) -> bool:
    """Serialize a complete task list and overwrite the file with it."""
    return atomic_write(path, serialize_all(tasks))


class FolderTaskFiles:
    """Status files kept in a folder on disk."""

    def __init__(self, folder: Path | str):
        """Initialize folder storage.

        Args:
            folder: Tasks folder. Created by ensure() if missing.
        """
        self.folder = Path(folder)

    def path_for(self, status: TaskStatus | str) -> Path:
        """Get the file path for a status.

        Raises:
            InvalidStatusError: If status is unknown
        """
        return self.folder / file_for_status(status)

    def ensure(self) -> None:
        ensure_data_files(self.folder)

    def read(self, status: TaskStatus | str) -> str:
        path = self.path_for(status)
        text = read_text(path)
        logger.debug("Read %s (%d chars)", path, len(text))
        return text

    def write(self, status: TaskStatus | str, text: str) -> None:
        path = self.path_for(status)
        if atomic_write(path, text):
            logger.info("Wrote %s (%d chars)", path, len(text))
        else:
            logger.debug("Unchanged %s, skipped write", path)

    def __repr__(self) -> str:
        return f"FolderTaskFiles({str(self.folder)!r})"
