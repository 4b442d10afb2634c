"""Dependency helpers shared across FastAPI routes."""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from desktodo.config import Config
from desktodo.todo import JsonStorage, TaskService

from .gateway import RequestGateway


def build_gateway(config: Optional[Config] = None) -> RequestGateway:
    """Wire storage, service and gateway for one application instance."""
    config = config or Config.load()
    storage = JsonStorage(config.data_dir)
    service = TaskService(storage, lock_timeout=config.storage.lock_timeout_seconds)
    return RequestGateway(service)


def get_gateway(request: Request) -> RequestGateway:
    """Gateway bound to the running app (set up in create_app)."""
    return request.app.state.gateway
