"""Task and settings persistence shared by the gateway, the HTTP server and the CLI."""

from .exceptions import (
    DirectoryResolutionError,
    ImportFormatError,
    LockAcquisitionError,
    StorageIOError,
    TaskServiceError,
    TodoAppError,
)
from .models import Attachment, Priority, Settings, Task, TaskFilter, TaskStats, TaskUpdate, Theme
from .service import TaskService, compute_stats, filter_tasks
from .storage import JsonStorage, resolve_data_dir

__all__ = [
    "Attachment",
    "DirectoryResolutionError",
    "ImportFormatError",
    "JsonStorage",
    "LockAcquisitionError",
    "Priority",
    "Settings",
    "StorageIOError",
    "Task",
    "TaskFilter",
    "TaskService",
    "TaskServiceError",
    "TaskStats",
    "TaskUpdate",
    "Theme",
    "TodoAppError",
    "compute_stats",
    "filter_tasks",
    "resolve_data_dir",
]
