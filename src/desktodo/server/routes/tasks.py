"""Task endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import Depends, FastAPI, Query

from desktodo.todo import Task, TaskFilter, TaskStats, TaskUpdate

from ..dependencies import get_gateway
from ..gateway import RequestGateway
from ..schemas import ApiResponse, CreateTaskRequest


def register_task_routes(app: FastAPI) -> None:
    """Register task CRUD and stats endpoints."""

    @app.get("/api/tasks", response_model=ApiResponse[List[Task]])
    async def get_tasks(
        task_filter: TaskFilter = Query(TaskFilter.ALL, alias="filter"),
        search: Optional[str] = None,
        gateway: RequestGateway = Depends(get_gateway),
    ) -> ApiResponse[List[Task]]:
        """List tasks in stored order, optionally filtered."""
        return await gateway.get_tasks(task_filter, search)

    @app.post("/api/tasks", response_model=ApiResponse[Task])
    async def create_task(
        request: CreateTaskRequest, gateway: RequestGateway = Depends(get_gateway)
    ) -> ApiResponse[Task]:
        """Create a new task."""
        return await gateway.create_task(
            request.title,
            request.description,
            request.priority,
            request.due_date,
            request.attachments,
        )

    @app.get("/api/tasks/stats", response_model=ApiResponse[TaskStats])
    async def get_task_stats(
        gateway: RequestGateway = Depends(get_gateway),
    ) -> ApiResponse[TaskStats]:
        """Counts by completion, priority and due date."""
        return await gateway.get_task_stats()

    @app.patch("/api/tasks/{task_id}", response_model=ApiResponse[Optional[Task]])
    async def update_task(
        task_id: str, changes: TaskUpdate, gateway: RequestGateway = Depends(get_gateway)
    ) -> ApiResponse[Optional[Task]]:
        """Apply a partial update; data is null when the id is unknown."""
        return await gateway.update_task(task_id, changes)

    @app.delete("/api/tasks/{task_id}", response_model=ApiResponse[bool])
    async def delete_task(
        task_id: str, gateway: RequestGateway = Depends(get_gateway)
    ) -> ApiResponse[bool]:
        """Delete a task."""
        return await gateway.delete_task(task_id)
