"""FastAPI route handlers and API endpoints."""

import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from core.uploads import remove_spooled, spool_upload
from models.validation import FileMetadata, MimeValidationOptions
from validation.validators import MimeValidator

# MIME validator will be injected from main.py
mime_validator: Optional[MimeValidator] = None

# Spool directory will be injected from main.py
upload_temp_dir: Optional[str] = None


async def validate_upload(request: Request) -> JSONResponse:
    """
    Validate one uploaded file against an accept list.

    The multipart body carries the validator options as plain fields
    (``accepts``, ``input_name``, ``detectPdfScripts``, ``detectSvgScripts``)
    and any number of file parts keyed by field name. The response is the
    validation result, with HTTP 200 for every file outcome.
    """
    if mime_validator is None:
        raise RuntimeError("MIME validator has not been configured")

    form = await request.form()
    raw_options: Dict[str, Any] = {}
    uploads: Dict[str, UploadFile] = {}
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            uploads.setdefault(key, value)
        else:
            raw_options[key] = value

    files: Dict[str, FileMetadata] = {}
    try:
        options = MimeValidationOptions.from_options(raw_options, mime_validator.config)
        for key, upload in uploads.items():
            files[key] = await spool_upload(upload, upload_temp_dir)

        result = await mime_validator.validate(options, files)
    finally:
        remove_spooled(files.values())
        await form.close()

    logging.info(f"Validated upload '{options.input_name}': valid={result.is_valid} code={result.code.value}")
    return JSONResponse(content=result.to_dict())


async def health_check() -> Dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


def set_mime_validator(validator_instance: MimeValidator) -> None:
    """Set the MIME validator instance."""
    global mime_validator
    mime_validator = validator_instance


def set_upload_temp_dir(path: Optional[str]) -> None:
    """Set the directory uploads are spooled to."""
    global upload_temp_dir
    upload_temp_dir = path
