"""Route registration helpers."""

from .data import register_data_routes
from .settings import register_settings_routes
from .tasks import register_task_routes

__all__ = [
    "register_data_routes",
    "register_settings_routes",
    "register_task_routes",
]
