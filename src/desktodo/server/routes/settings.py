"""Settings endpoints."""

from __future__ import annotations

from fastapi import Depends, FastAPI

from desktodo.todo import Settings

from ..dependencies import get_gateway
from ..gateway import RequestGateway
from ..schemas import ApiResponse


def register_settings_routes(app: FastAPI) -> None:
    """Register settings read/replace endpoints."""

    @app.get("/api/settings", response_model=ApiResponse[Settings])
    async def get_settings(gateway: RequestGateway = Depends(get_gateway)) -> ApiResponse[Settings]:
        """Current settings; defaults are written on first access."""
        return await gateway.get_settings()

    @app.put("/api/settings", response_model=ApiResponse[Settings])
    async def update_settings(
        settings: Settings, gateway: RequestGateway = Depends(get_gateway)
    ) -> ApiResponse[Settings]:
        """Replace the whole settings document."""
        return await gateway.update_settings(settings)
