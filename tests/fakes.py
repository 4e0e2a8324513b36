"""In-memory TaskFiles fakes for service tests."""

from __future__ import annotations

from mdtasks.task_status import TaskStatus, parse_status


class MemoryTaskFiles:
    """
    TaskFiles kept in a dict.

    - Records every write (status order) for assertions
    - Counts ensure() calls
    """

    def __init__(self, texts: dict[TaskStatus, str] | None = None) -> None:
        self.texts: dict[TaskStatus, str] = dict(texts or {})
        self.writes: list[TaskStatus] = []
        self.ensure_calls = 0

    def ensure(self) -> None:
        self.ensure_calls += 1
        for status in TaskStatus:
            self.texts.setdefault(status, "")

    def read(self, status: TaskStatus | str) -> str:
        return self.texts.get(parse_status(status), "")

    def write(self, status: TaskStatus | str, text: str) -> None:
        status = parse_status(status)
        self.writes.append(status)
        self.texts[status] = text


class FailingTaskFiles(MemoryTaskFiles):
    """Raises OSError on any write to one status file."""

    def __init__(self, fail_on: TaskStatus, texts: dict[TaskStatus, str] | None = None) -> None:
        super().__init__(texts)
        self.fail_on = fail_on

    def write(self, status: TaskStatus | str, text: str) -> None:
        if parse_status(status) == self.fail_on:
            raise OSError(f"disk full writing {self.fail_on.value}")
        super().write(status, text)


class FrozenReadTaskFiles(MemoryTaskFiles):
    """
    Reads return the content captured by freeze(), writes go through.

    Models several callers that all read before any of them writes.
    """

    def __init__(self, texts: dict[TaskStatus, str] | None = None) -> None:
        super().__init__(texts)
        self.snapshot: dict[TaskStatus, str] | None = None

    def freeze(self) -> None:
        self.snapshot = dict(self.texts)

    def read(self, status: TaskStatus | str) -> str:
        if self.snapshot is None:
            return super().read(status)
        return self.snapshot.get(parse_status(status), "")
