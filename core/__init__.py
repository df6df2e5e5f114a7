"""Core configuration and utilities."""

from .config import AppConfig, create_fastapi_app, create_mime_validator, setup_logging, setup_middleware
from .uploads import remove_spooled, spool_upload

__all__ = [
    "AppConfig",
    "create_fastapi_app",
    "create_mime_validator",
    "setup_logging",
    "setup_middleware",
    "spool_upload",
    "remove_spooled",
]
