"""Local API server and request gateway for the desktop UI."""

from .app import create_app
from .gateway import RequestGateway
from .schemas import ApiResponse

__all__ = ["ApiResponse", "RequestGateway", "create_app"]
