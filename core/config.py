"""Core configuration and utility functions."""

import logging
import os
import tempfile
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI

from error_handling.handlers import ErrorHandler, ErrorHandlingMiddleware
from models.validation import TRUE_VALUES, MimeValidatorConfig
from validation.validators import MimeValidator

# Load environment variables
load_dotenv()

# MIME validator configuration constants
DEFAULT_DETECT_PDF_SCRIPTS = False
DEFAULT_DETECT_SVG_SCRIPTS = True
CSV_SNIFF_BYTES = 2048
LOG_LEVEL = "INFO"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUE_VALUES


class AppConfig:
    """Application configuration settings."""

    def __init__(self):
        self.default_detect_pdf_scripts = _env_bool("DEFAULT_DETECT_PDF_SCRIPTS", DEFAULT_DETECT_PDF_SCRIPTS)
        self.default_detect_svg_scripts = _env_bool("DEFAULT_DETECT_SVG_SCRIPTS", DEFAULT_DETECT_SVG_SCRIPTS)
        self.csv_sniff_bytes = int(os.getenv("CSV_SNIFF_BYTES", CSV_SNIFF_BYTES))
        self.upload_temp_dir: Optional[str] = os.getenv("UPLOAD_TEMP_DIR") or None
        self.log_level = os.getenv("LOG_LEVEL", LOG_LEVEL)

        if self.csv_sniff_bytes <= 0:
            raise ValueError("CSV_SNIFF_BYTES must be a positive integer")
        if self.upload_temp_dir and not os.path.isdir(self.upload_temp_dir):
            raise ValueError(f"UPLOAD_TEMP_DIR does not exist: {self.upload_temp_dir}")

    def get_mime_validator_config(self) -> MimeValidatorConfig:
        """Get MIME validator configuration."""
        return MimeValidatorConfig(
            default_detect_pdf_scripts=self.default_detect_pdf_scripts,
            default_detect_svg_scripts=self.default_detect_svg_scripts,
            csv_sniff_bytes=self.csv_sniff_bytes,
        )

    def get_upload_temp_dir(self) -> str:
        """Directory used to spool uploads before validation."""
        return self.upload_temp_dir or tempfile.gettempdir()


def create_fastapi_app() -> FastAPI:
    """Create and configure FastAPI application instance."""
    app = FastAPI(
        title="MIME Guard",
        description="Validates uploaded files against accepted MIME types",
        version="1.0.0",
    )

    return app


def setup_middleware(app: FastAPI, config: AppConfig) -> None:
    """Configure FastAPI middleware."""
    error_handler = ErrorHandler()
    app.add_middleware(ErrorHandlingMiddleware, error_handler=error_handler)


def create_mime_validator(config: AppConfig) -> MimeValidator:
    """Create MIME validator instance with configuration."""
    return MimeValidator(config.get_mime_validator_config())


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure application logging."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
        ],
    )

    # Suppress some noisy loggers
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
