"""mdtasks - tasks stored as YAML blocks in per-status markdown files.

The service exposes five operations: list_all, create, update_by_index,
delete_by_index and reserialize_all. Each is available as a TaskService
method and as a module-level function that takes the tasks folder.
"""

from mdtasks.errors import InvalidStatusError, MdTasksError, TaskValidationError
from mdtasks.task_codec import ParseResult, SkippedBlock, parse, parse_tasks, serialize, serialize_all
from mdtasks.task_model import Task, TaskFields, TaskUpdate
from mdtasks.task_service import (
    ReserializeReport,
    TaskService,
    create,
    delete_by_index,
    list_all,
    reserialize_all,
    update_by_index,
)
from mdtasks.task_status import STATUS_TO_FILE, VALID_STATUSES, TaskStatus, file_for_status, parse_status
from mdtasks.task_storage import FolderTaskFiles, TaskFiles

__all__ = [
    "STATUS_TO_FILE",
    "VALID_STATUSES",
    "FolderTaskFiles",
    "InvalidStatusError",
    "MdTasksError",
    "ParseResult",
    "ReserializeReport",
    "SkippedBlock",
    "Task",
    "TaskFields",
    "TaskFiles",
    "TaskService",
    "TaskStatus",
    "TaskUpdate",
    "TaskValidationError",
    "create",
    "delete_by_index",
    "file_for_status",
    "list_all",
    "parse",
    "parse_status",
    "parse_tasks",
    "reserialize_all",
    "serialize",
    "serialize_all",
    "update_by_index",
]
