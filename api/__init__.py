"""API endpoints and route handlers."""

from .endpoints import health_check, set_mime_validator, set_upload_temp_dir, validate_upload

__all__ = [
    "validate_upload",
    "health_check",
    "set_mime_validator",
    "set_upload_temp_dir",
]
