"""Folder storage: ensure, read, whole-file write."""

import stat
from pathlib import Path

import pytest

from mdtasks.errors import InvalidStatusError
from mdtasks.task_model import Task
from mdtasks.task_status import STATUS_TO_FILE, TaskStatus
from mdtasks.task_storage import (
    FolderTaskFiles,
    atomic_write,
    ensure_data_files,
    read_text,
    write_tasks,
)

ALL_FILES = sorted(STATUS_TO_FILE.values())


def test_ensure_creates_folder_and_empty_files(tasks_folder: Path) -> None:
    ensure_data_files(tasks_folder)

    assert sorted(p.name for p in tasks_folder.iterdir()) == ALL_FILES
    for name in ALL_FILES:
        assert (tasks_folder / name).read_text(encoding="utf-8") == ""


def test_ensure_is_idempotent_and_keeps_content(tasks_folder: Path) -> None:
    ensure_data_files(tasks_folder)
    (tasks_folder / "backlog.md").write_text("keep me", encoding="utf-8")

    ensure_data_files(tasks_folder)

    assert (tasks_folder / "backlog.md").read_text(encoding="utf-8") == "keep me"


def test_read_missing_file_is_empty(tmp_path: Path) -> None:
    assert read_text(tmp_path / "nope.md") == ""


def test_read_by_status(folder_files: FolderTaskFiles) -> None:
    folder_files.ensure()
    (folder_files.folder / "completed-tasks.md").write_text("done text", encoding="utf-8")
    assert folder_files.read(TaskStatus.COMPLETE) == "done text"
    assert folder_files.read("complete") == "done text"


def test_write_replaces_whole_file(folder_files: FolderTaskFiles) -> None:
    folder_files.ensure()
    folder_files.write("backlog", "first version, quite long\n")
    folder_files.write("backlog", "second\n")

    assert folder_files.read("backlog") == "second\n"


def test_write_leaves_no_temp_files(folder_files: FolderTaskFiles) -> None:
    folder_files.ensure()
    folder_files.write("archived", "x")
    folder_files.write("archived", "x")

    assert sorted(p.name for p in folder_files.folder.iterdir()) == ALL_FILES


def test_write_tasks_serializes_list(tmp_path: Path) -> None:
    path = tmp_path / "backlog.md"
    assert write_tasks(path, [Task(title="A"), Task(title="B")]) is True
    text = path.read_text(encoding="utf-8")
    assert text.count("```task\n") == 2
    assert write_tasks(path, [Task(title="A"), Task(title="B")]) is False, (
        "Unchanged content should not be rewritten"
    )


def test_unknown_status_path_raises(folder_files: FolderTaskFiles) -> None:
    with pytest.raises(InvalidStatusError):
        folder_files.read("someday")


@pytest.mark.parametrize("mode", [0o644, 0o640])
def test_write_keeps_file_mode(folder_files: FolderTaskFiles, mode: int) -> None:
    """Rewriting a status file must not narrow its permissions to mkstemp's 0600."""
    folder_files.ensure()
    path = folder_files.path_for("backlog")
    path.chmod(mode)

    folder_files.write("backlog", "new content\n")

    assert stat.S_IMODE(path.stat().st_mode) == mode


def test_new_file_gets_default_mode(tmp_path: Path) -> None:
    """A file created by a write has the same mode as any newly created file."""
    reference = tmp_path / "reference.md"
    reference.write_text("", encoding="utf-8")
    path = tmp_path / "backlog.md"

    atomic_write(path, "x")

    assert stat.S_IMODE(path.stat().st_mode) == stat.S_IMODE(reference.stat().st_mode)
