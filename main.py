"""
MIME Guard - validates uploaded files against accepted MIME types.

This is the main entry point for the FastAPI application.
"""

import logging

from fastapi import FastAPI

from api.endpoints import health_check, set_mime_validator, set_upload_temp_dir, validate_upload
from core.config import AppConfig, create_fastapi_app, create_mime_validator, setup_logging, setup_middleware


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    # Initialize configuration
    config = AppConfig()

    # Setup logging
    setup_logging(config.log_level)

    # Create FastAPI app
    app = create_fastapi_app()

    # Setup middleware
    setup_middleware(app, config)

    # Inject dependencies into endpoints
    set_mime_validator(create_mime_validator(config))
    set_upload_temp_dir(config.get_upload_temp_dir())

    # Register routes
    app.post("/validate")(validate_upload)
    app.get("/health")(health_check)

    logging.info("FastAPI application created and configured successfully")
    logging.info(
        f"Configuration: detect_pdf_scripts={config.default_detect_pdf_scripts}, "
        f"detect_svg_scripts={config.default_detect_svg_scripts}, csv_sniff_bytes={config.csv_sniff_bytes}"
    )

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    # Run the application
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
