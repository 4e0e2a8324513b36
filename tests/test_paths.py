"""Configuration from environment variables."""

import logging
from pathlib import Path

import pytest

from mdtasks.paths import get_log_level, get_tasks_folder
from mdtasks.task_service import TaskService


def test_tasks_folder_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MDTASKS_DATA", str(tmp_path / "tasks"))
    assert get_tasks_folder() == (tmp_path / "tasks").resolve()


def test_tasks_folder_unset_raises(monkeypatch) -> None:
    monkeypatch.delenv("MDTASKS_DATA", raising=False)
    with pytest.raises(RuntimeError, match="MDTASKS_DATA"):
        get_tasks_folder()


def test_service_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MDTASKS_DATA", str(tmp_path))
    service = TaskService.from_env()
    service.create({"title": "A"})
    assert (tmp_path / "backlog.md").exists()


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, logging.INFO), ("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("loud", logging.INFO)],
)
def test_log_level(monkeypatch, value, expected) -> None:
    if value is None:
        monkeypatch.delenv("MDTASKS_LOG_LEVEL", raising=False)
    else:
        monkeypatch.setenv("MDTASKS_LOG_LEVEL", value)
    assert get_log_level() == expected
