"""FastAPI application bootstrap."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from desktodo import __version__
from desktodo.config import Config

from .dependencies import build_gateway
from .gateway import RequestGateway
from .routes import register_data_routes, register_settings_routes, register_task_routes
from .schemas import ApiResponse, HealthResponse

logger = logging.getLogger(__name__)

_BODY_METHODS = {"POST", "PUT", "PATCH"}


def create_app(
    config: Optional[Config] = None, gateway: Optional[RequestGateway] = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Only the configured UI origins may call the API cross-origin. The UI
    always gets an envelope, so request validation errors are reported
    as failed envelopes instead of 422 responses.
    """
    config = config or Config.load()
    app = FastAPI(title="Todo Desk Local API", version=__version__)
    app.state.gateway = gateway or build_gateway(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def require_json_body(request: Request, call_next):
        # Requests without a JSON content type never need a preflight, so a
        # foreign page could send them; writes only accept application/json.
        if request.method in _BODY_METHODS:
            media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
            if media_type != "application/json":
                logger.warning(
                    "Rejected %s %s with content type %r",
                    request.method,
                    request.url.path,
                    media_type,
                )
                return JSONResponse(
                    ApiResponse.fail("Invalid request: JSON body required").model_dump()
                )
        return await call_next(request)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        logger.warning("Rejected request %s %s: %s", request.method, request.url.path, details)
        return JSONResponse(ApiResponse.fail(f"Invalid request: {details}").model_dump())

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    register_task_routes(app)
    register_settings_routes(app)
    register_data_routes(app)

    return app
