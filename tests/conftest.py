from __future__ import annotations

from pathlib import Path

import pytest

from mdtasks.task_service import TaskService
from mdtasks.task_storage import FolderTaskFiles

from .fakes import MemoryTaskFiles


@pytest.fixture()
def tasks_folder(tmp_path: Path) -> Path:
    """Tasks folder that does not exist yet."""
    return tmp_path / "tasks"


@pytest.fixture()
def folder_files(tasks_folder: Path) -> FolderTaskFiles:
    return FolderTaskFiles(tasks_folder)


@pytest.fixture()
def service(folder_files: FolderTaskFiles) -> TaskService:
    """Service backed by a real folder under tmp_path."""
    return TaskService(folder_files)


@pytest.fixture()
def memory_files() -> MemoryTaskFiles:
    return MemoryTaskFiles()


@pytest.fixture()
def memory_service(memory_files: MemoryTaskFiles) -> TaskService:
    return TaskService(memory_files)
