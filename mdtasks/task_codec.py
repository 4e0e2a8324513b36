#!/usr/bin/env python3
"""Markdown codec: task blocks embedded in a status file.

A status file is ordinary markdown holding zero or more fenced task
blocks, separated by blank lines:

    ```task
    title: Write docs
    parentTitle: null
    status: backlog
    description: ''
    estimate: 3
    ```

The inner text of each block is YAML. Everything outside the blocks is
ignored on read and is not written back.

A block that is not valid YAML, or whose YAML is not a mapping, is skipped.
Skipped blocks are logged and reported in ParseResult.skipped; they are not
part of the task list, so they disappear the next time the file is written.

Serialization is canonical (fixed key order, PyYAML formatting), so
re-encoding decoded text is equal in content, not byte-for-byte.

Usage:
    from mdtasks.task_codec import parse, serialize_all

    result = parse(text, TaskStatus.BACKLOG)
    for skip in result.skipped:
        print(skip.position, skip.reason)
    text = serialize_all(result.tasks)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

import yaml

from mdtasks.task_model import Task
from mdtasks.task_status import TaskStatus, parse_status

logger = logging.getLogger(__name__)

FENCE_OPEN = "```task"
FENCE_CLOSE = "```"

# Opening fence (possibly indented, e.g. inside a list item), then the YAML
# body up to the next closing fence at exactly the same indentation. Deeper
# indented backticks belong to YAML scalars and do not close the block.
_BLOCK_PATTERN = re.compile(
    r"^(?P<indent>[ \t]*)```task[ \t]*\r?\n(?P<body>.*?)^(?P=indent)```",
    re.MULTILINE | re.DOTALL,
)

# Wide enough that ordinary titles stay on one line
YAML_LINE_WIDTH = 80


@dataclass
class SkippedBlock:
    """A task block that could not be decoded."""

    position: int  # Ordinal of the block among all blocks in the file
    offset: int  # Character offset of the opening fence
    reason: str


@dataclass
class ParseResult:
    """Tasks decoded from one status file, plus the blocks that were skipped."""

    tasks: list[Task] = field(default_factory=list)
    skipped: list[SkippedBlock] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def _decode_block(body: str) -> dict:
    """Decode the YAML inside one block.

    Raises:
        ValueError: If the YAML is invalid or not a mapping
    """
    try:
        data = yaml.safe_load(body)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Block is a {type(data).__name__}, not a mapping")
    return data


def parse(text: str, enforced_status: TaskStatus | str) -> ParseResult:
    """Parse all task blocks in a status file.

    Args:
        text: Full file content
        enforced_status: Status given to every task, whatever the block says

    Returns:
        ParseResult with tasks in block order
    """
    status = parse_status(enforced_status)
    result = ParseResult()

    for position, match in enumerate(_BLOCK_PATTERN.finditer(text)):
        try:
            data = _decode_block(match.group("body"))
        except ValueError as e:
            result.skipped.append(SkippedBlock(position=position, offset=match.start(), reason=str(e)))
            logger.warning(
                "Skipping malformed task block %d (status: %s, offset: %d): %s",
                position,
                status.value,
                match.start(),
                e,
            )
            continue
        result.tasks.append(Task.from_block_dict(data, status))

    return result


def parse_tasks(text: str, enforced_status: TaskStatus | str) -> list[Task]:
    """Parse a status file and return only the decoded tasks."""
    return parse(text, enforced_status).tasks


def serialize(task: Task) -> str:
    """Render one task as a fenced block, ending in a newline."""
    yaml_text = yaml.safe_dump(
        task.to_block_dict(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=YAML_LINE_WIDTH,
    )
    return f"{FENCE_OPEN}\n{yaml_text}{FENCE_CLOSE}\n"


def serialize_all(tasks: Iterable[Task]) -> str:
    """Render a whole status file: blocks separated by a blank line."""
    return "\n".join(serialize(task) for task in tasks)
