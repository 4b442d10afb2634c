"""Request gateway: async handlers wrapping TaskService in the response envelope."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, List, Optional

from desktodo.todo import (
    Attachment,
    Settings,
    Task,
    TaskFilter,
    TaskService,
    TaskStats,
    TaskUpdate,
    TodoAppError,
    filter_tasks,
)

from .schemas import ApiResponse

logger = logging.getLogger(__name__)


class RequestGateway:
    """Exposes TaskService operations as coroutines returning ApiResponse.

    Blocking file I/O runs in a worker thread. The service lock is held by that
    thread, so a cancelled request still finishes its write before the lock is
    released. Errors never escape: they are logged with their kind and turned
    into a message string.
    """

    def __init__(self, service: TaskService) -> None:
        self._service = service

    async def _call(self, action: str, func: Callable[..., Any], *args: Any) -> ApiResponse:
        try:
            result = await asyncio.to_thread(func, *args)
        except TodoAppError as exc:
            logger.error("Failed to %s [%s]: %s", action, type(exc).__name__, exc)
            return ApiResponse.fail(f"Failed to {action}: {exc}")
        except Exception as exc:
            logger.exception("Unexpected error while trying to %s", action)
            return ApiResponse.fail(f"Failed to {action}: {exc}")
        return ApiResponse.ok(result)

    async def get_tasks(
        self, task_filter: TaskFilter = TaskFilter.ALL, search: Optional[str] = None
    ) -> ApiResponse[List[Task]]:
        def load() -> List[Task]:
            return filter_tasks(self._service.list_tasks(), task_filter, search)

        return await self._call("load tasks", load)

    async def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        priority: Optional[str] = None,
        due_date: Optional[str] = None,
        attachments: Optional[List[Attachment]] = None,
    ) -> ApiResponse[Task]:
        return await self._call(
            "create task",
            self._service.create_task,
            title,
            description,
            priority,
            due_date,
            attachments,
        )

    async def update_task(self, task_id: str, changes: TaskUpdate) -> ApiResponse[Optional[Task]]:
        return await self._call("update task", self._service.update_task, task_id, changes)

    async def delete_task(self, task_id: str) -> ApiResponse[bool]:
        response = await self._call("delete task", self._service.delete_task, task_id)
        if response.success and not response.data:
            return ApiResponse.fail("Task not found")
        return response

    async def get_task_stats(self) -> ApiResponse[TaskStats]:
        return await self._call("load task stats", self._service.task_stats)

    async def get_settings(self) -> ApiResponse[Settings]:
        return await self._call("load settings", self._service.get_settings)

    async def update_settings(self, settings: Settings) -> ApiResponse[Settings]:
        return await self._call("save settings", self._service.update_settings, settings)

    async def export_data(self) -> ApiResponse[str]:
        return await self._call("export data", self._service.export_data)

    async def import_data(self, payload: str) -> ApiResponse[bool]:
        response = await self._call("import data", self._service.import_data, payload)
        if response.success:
            return ApiResponse.ok(True)
        return response

    async def clear_all_data(self) -> ApiResponse[bool]:
        response = await self._call("clear data", self._service.clear_all_data)
        if response.success:
            return ApiResponse.ok(True)
        return response

    async def get_data_dir_path(self) -> ApiResponse[str]:
        return await self._call("resolve data directory", self._service.data_dir_path)
