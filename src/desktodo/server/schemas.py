"""Pydantic schemas for the local API server."""

from __future__ import annotations

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from desktodo.todo import Attachment

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform envelope returned by every gateway operation."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str) -> "ApiResponse[T]":
        return cls(success=False, error=message)


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class CreateTaskRequest(BaseModel):
    """Request body for creating a task."""

    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    priority: Optional[str] = Field(default=None, description="high | medium | low")
    due_date: Optional[str] = Field(default=None, description="ISO date (YYYY-MM-DD)")
    attachments: Optional[List[Attachment]] = None


class ImportDataRequest(BaseModel):
    """Request body for replacing the task collection."""

    data: str = Field(..., description="JSON array of tasks as produced by export")


class ClearDataRequest(BaseModel):
    """Request body for deleting every task.

    A JSON body keeps cross-site form posts (sent as text/plain) from reaching
    the handler.
    """

    confirm: bool = False
