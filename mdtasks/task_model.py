#!/usr/bin/env python3
"""Task model and the payload models used to create and update tasks.

A Task is a plain record: it has no id, and its status is whatever file it
was read from. Create and update payloads arrive as loose dictionaries
(from a web form, a JSON body, a test) and are validated with pydantic
before they reach the service.

Usage:
    from mdtasks.task_model import Task, TaskFields, TaskUpdate

    fields = TaskFields.from_payload({"title": "Write docs", "status": "backlog"})
    task = fields.to_task(parse_status(fields.status))

    update = TaskUpdate.from_payload({"status": "complete", "estimate": 3})
    task = task.merged(update)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from mdtasks.errors import TaskValidationError
from mdtasks.task_status import TaskStatus, parse_status

logger = logging.getLogger(__name__)

# Keys with a dedicated Task attribute, in serialization order
RECOGNIZED_KEYS = ("title", "parentTitle", "status", "description")

# Keys written by older versions that are dropped on read
LEGACY_KEYS = ("id", "parentId")


def _coerce_text(value: Any) -> str:
    """Coerce a decoded YAML value to text; falsy non-text becomes ''."""
    if isinstance(value, str):
        return value
    return str(value) if value else ""


@dataclass
class Task:
    """A single task record.

    Fields:
        title: Task title (may be empty when decoded from a damaged block)
        status: Lifecycle status, enforced from the file the task lives in
        parent_title: Free-text reference to another task's title, never validated
        description: Free text
        extra: Any other keys found in the block, kept in their original order
    """

    title: str
    status: TaskStatus = TaskStatus.BACKLOG
    parent_title: str | None = None
    description: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def to_block_dict(self) -> dict[str, Any]:
        """Convert task to the mapping written inside a task block.

        Recognized keys come first in fixed order, extra keys after. An
        extra key that shadows a recognized key is not written.
        """
        data: dict[str, Any] = {
            "title": self.title,
            "parentTitle": self.parent_title or None,
            "status": self.status.value,
            "description": self.description or "",
        }
        for key, value in self.extra.items():
            if key not in data:
                data[key] = value
        return data

    @classmethod
    def from_block_dict(cls, data: dict[str, Any], status: TaskStatus) -> Task:
        """Create Task from a decoded block mapping.

        The block's own status key is ignored: status is always the one
        given by the caller.
        """
        title = data.get("title")
        parent_title = data.get("parentTitle")
        extra = {
            key: value
            for key, value in data.items()
            if key not in RECOGNIZED_KEYS and key not in LEGACY_KEYS
        }
        return cls(
            title="" if title is None else str(title),
            status=status,
            parent_title=str(parent_title) if parent_title else None,
            description=_coerce_text(data.get("description")),
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "title": self.title,
            "parentTitle": self.parent_title,
            "status": self.status.value,
            "description": self.description,
            "extra": dict(self.extra),
        }

    def merged(self, update: TaskUpdate) -> Task:
        """Return a copy with the update's set fields applied.

        Raises:
            InvalidStatusError: If the update carries an unknown status
        """
        changes = update.changes()
        if "status" in changes:
            changes["status"] = parse_status(changes["status"])
        # An explicit extra mapping replaces the whole field
        base_extra = changes.pop("extra", self.extra)
        merged = replace(self, **changes)
        merged.extra = {**base_extra, **update.extra_keys()}
        return merged

    def __repr__(self) -> str:
        return f"Task(title={self.title!r}, status={self.status.value})"


def _status_value(value: Any) -> Any:
    return value.value if isinstance(value, TaskStatus) else value


def _validation_error(kind: str, e: ValidationError) -> TaskValidationError:
    errors = e.errors(include_url=False)
    summary = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or kind}: {err['msg']}" for err in errors
    )
    return TaskValidationError(f"Invalid {kind}: {summary}", errors)


def _map_legacy_parent_id(data: Any) -> Any:
    """Map a legacy parentId to parentTitle when parentTitle is not given."""
    if isinstance(data, dict) and data.get("parentTitle") is None and data.get("parentId") is not None:
        logger.debug("Mapping legacy parentId %r to parentTitle", data["parentId"])
        data = {**data, "parentTitle": data["parentId"]}
    return data


class TaskFields(BaseModel):
    """Payload for creating a task.

    Status is not validated here; membership is checked by the service so
    that any unknown status (None and non-strings included) raises
    InvalidStatusError rather than a validation error.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, description="Task title.")
    parent_title: str | None = Field(
        None, alias="parentTitle", description="Title of the parent task, if any."
    )
    status: Any = Field("backlog", description="Lifecycle status.")
    description: str = Field("", description="Free-text description.")

    @model_validator(mode="before")
    @classmethod
    def _legacy_parent_id(cls, data: Any) -> Any:
        return _map_legacy_parent_id(data)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title is required")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _status_to_str(cls, value: Any) -> Any:
        return _status_value(value)

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | TaskFields) -> TaskFields:
        """Validate a create payload.

        Raises:
            TaskValidationError: If the payload does not validate
        """
        if isinstance(payload, cls):
            return payload
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise _validation_error("task", e) from e

    def to_task(self, status: TaskStatus) -> Task:
        return Task(
            title=self.title,
            status=status,
            parent_title=self.parent_title or None,
            description=self.description,
        )


class TaskUpdate(BaseModel):
    """Payload for updating a task.

    Every field is optional. Fields left out, or given as None, keep their
    current value; there is no way to clear a field. An explicit extra
    mapping replaces the task's extra; other keys that are not task fields
    are merged into it one by one.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: str | None = Field(None, min_length=1)
    parent_title: str | None = Field(None, alias="parentTitle")
    status: Any = None
    description: str | None = None
    extra: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _legacy_parent_id(cls, data: Any) -> Any:
        return _map_legacy_parent_id(data)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("title must not be blank")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _status_to_str(cls, value: Any) -> Any:
        return _status_value(value)

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | TaskUpdate) -> TaskUpdate:
        """Validate an update payload.

        Raises:
            TaskValidationError: If the payload does not validate
        """
        if isinstance(payload, cls):
            return payload
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise _validation_error("update", e) from e

    def changes(self) -> dict[str, Any]:
        """Return the Task attribute changes this update carries.

        Status is returned as given, unvalidated. extra is only present
        when the payload carried an explicit extra mapping.
        """
        changes: dict[str, Any] = {}
        for name in ("title", "parent_title", "status", "description", "extra"):
            value = getattr(self, name)
            if value is not None:
                changes[name] = value
        return changes

    def extra_keys(self) -> dict[str, Any]:
        """Return the unknown top-level keys, to be merged into extra."""
        return {
            key: value
            for key, value in (self.model_extra or {}).items()
            if key not in LEGACY_KEYS and value is not None
        }
