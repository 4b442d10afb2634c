"""Data management endpoints (export / import / clear)."""

from __future__ import annotations

from fastapi import Depends, FastAPI

from ..dependencies import get_gateway
from ..gateway import RequestGateway
from ..schemas import ApiResponse, ClearDataRequest, ImportDataRequest


def register_data_routes(app: FastAPI) -> None:
    """Register data management endpoints."""

    @app.get("/api/data/export", response_model=ApiResponse[str])
    async def export_data(gateway: RequestGateway = Depends(get_gateway)) -> ApiResponse[str]:
        return await gateway.export_data()

    @app.post("/api/data/import", response_model=ApiResponse[bool])
    async def import_data(
        request: ImportDataRequest, gateway: RequestGateway = Depends(get_gateway)
    ) -> ApiResponse[bool]:
        """Replace the whole task collection."""
        return await gateway.import_data(request.data)

    @app.post("/api/data/clear", response_model=ApiResponse[bool])
    async def clear_all_data(
        request: ClearDataRequest, gateway: RequestGateway = Depends(get_gateway)
    ) -> ApiResponse[bool]:
        """Delete every task; the body must be JSON with confirm=true."""
        if not request.confirm:
            return ApiResponse.fail("Clear not confirmed")
        return await gateway.clear_all_data()

    @app.get("/api/data/path", response_model=ApiResponse[str])
    async def get_data_dir_path(gateway: RequestGateway = Depends(get_gateway)) -> ApiResponse[str]:
        return await gateway.get_data_dir_path()
