"""MIME type detection and the upload validation pipeline."""

import logging
import mimetypes
import os
from pathlib import Path
from typing import Awaitable, Callable, Mapping, Optional

import magic
from starlette.concurrency import run_in_threadpool

from models.validation import (
    FileMetadata,
    MimeValidationOptions,
    MimeValidatorConfig,
    ValidationOutcome,
    ValidationResult,
)
from validation.inspectors import has_malicious_pdf, has_malicious_svg, looks_like_csv
from validation.matching import PLAIN_TEXT, base_mime, is_text_like, matches, parse_accept_list

DEFAULT_MIME_TYPE = "application/octet-stream"

ENCODING_MIME_MAP = {
    "gzip": "application/gzip",
    "bzip2": "application/x-bzip2",
    "xz": "application/x-xz",
    "br": "application/x-brotli",
    "compress": "application/x-compress",
}

FileReader = Callable[[str], Awaitable[bytes]]


class MimeTypeDetector:
    """Detects MIME types from file names and from file content."""

    def __init__(self):
        # Checked before the platform mimetypes database, which is missing
        # several source formats and maps .ts to MPEG transport streams.
        self.extension_mime_map = {
            ".csv": "text/csv",
            ".tsv": "text/tab-separated-values",
            ".json": "application/json",
            ".xml": "application/xml",
            ".md": "text/markdown",
            ".markdown": "text/markdown",
            ".yaml": "text/yaml",
            ".yml": "text/yaml",
            ".js": "application/javascript",
            ".mjs": "application/javascript",
            ".ts": "application/typescript",
            ".css": "text/css",
            ".py": "text/x-python",
            ".java": "text/x-java-source",
            ".c": "text/x-csrc",
            ".h": "text/x-csrc",
            ".cpp": "text/x-c++src",
            ".cc": "text/x-c++src",
            ".hpp": "text/x-c++src",
            ".rb": "text/x-ruby",
            ".sql": "application/sql",
            ".svg": "image/svg+xml",
        }

    def detect_from_filename(self, filename: str) -> str:
        """
        Get MIME type from the file extension only.

        Args:
            filename: Name of the file

        Returns:
            str: MIME type, ``application/octet-stream`` when unknown
        """
        if not filename:
            return DEFAULT_MIME_TYPE

        ext = os.path.splitext(filename.lower())[1]
        if ext in self.extension_mime_map:
            return self.extension_mime_map[ext]

        guessed, encoding = mimetypes.guess_type(filename.lower(), strict=False)
        if encoding:
            # mimetypes reports .gz/.bz2/.xz as an encoding of the inner type
            return ENCODING_MIME_MAP.get(encoding, DEFAULT_MIME_TYPE)
        return guessed or DEFAULT_MIME_TYPE

    async def detect_from_buffer(self, content: bytes) -> str:
        """
        Detect MIME type from magic bytes using python-magic.

        Args:
            content: File content as bytes

        Returns:
            str: Detected MIME type, possibly with parameters
        """
        if not content:
            return DEFAULT_MIME_TYPE

        try:
            mime_type = await run_in_threadpool(magic.from_buffer, content, mime=True)
        except Exception as e:
            logging.warning(f"Magic MIME detection failed: {e}, treating content as {DEFAULT_MIME_TYPE}")
            return DEFAULT_MIME_TYPE

        return mime_type or DEFAULT_MIME_TYPE


async def read_file_bytes(path: Optional[str]) -> bytes:
    """Read a stored upload without blocking the event loop."""
    if not path:
        raise FileNotFoundError("Upload has no storage location")
    return await run_in_threadpool(Path(path).read_bytes)


class MimeValidator:
    """
    Checks an uploaded file against an accept list.

    Stages run in a fixed order and the first failing stage decides the
    result: lookup, read, extension type, content type, CSV shape, PDF scan,
    SVG scan. File problems are returned as ``ValidationResult`` values and
    never raised.
    """

    def __init__(
        self,
        config: Optional[MimeValidatorConfig] = None,
        mime_detector: Optional[MimeTypeDetector] = None,
        file_reader: Optional[FileReader] = None,
    ):
        self.config = config or MimeValidatorConfig()
        self.mime_detector = mime_detector or MimeTypeDetector()
        self.file_reader = file_reader or read_file_bytes

    async def validate(self, options: MimeValidationOptions, files: Mapping[str, FileMetadata]) -> ValidationResult:
        """
        Run the validation pipeline for one uploaded file.

        Args:
            options: Accept list, upload field name and scan flags
            files: Uploaded files keyed by form field name

        Returns:
            ValidationResult: Outcome of the first failing stage, or acceptance
        """
        file = files.get(options.input_name)
        if file is None:
            logging.info(f"Upload '{options.input_name}' not found in request")
            return ValidationResult(ValidationOutcome.FILE_NOT_FOUND)

        try:
            content = await self.file_reader(file.temp_file_path)
        except Exception as e:
            logging.warning(f"Unable to read upload '{file.name}': {e}")
            return ValidationResult(ValidationOutcome.UNREADABLE, file)

        accepted = parse_accept_list(options.accepts)

        extension_mime = base_mime(self.mime_detector.detect_from_filename(file.name))
        if not matches(extension_mime, accepted):
            return self._reject(ValidationOutcome.EXTENSION_NOT_ALLOWED, file, extension_mime)

        if is_text_like(extension_mime):
            accepted.append(PLAIN_TEXT)

        content_mime = base_mime(await self.mime_detector.detect_from_buffer(content))
        logging.debug(f"Upload '{file.name}': extension type {extension_mime}, content type {content_mime}")
        if not matches(content_mime, accepted):
            return self._reject(ValidationOutcome.CONTENT_NOT_ALLOWED, file, content_mime)

        if extension_mime == "text/csv" and not looks_like_csv(content, self.config.csv_sniff_bytes):
            return self._reject(ValidationOutcome.CSV_SHAPE_MISMATCH, file, content_mime)

        if options.detect_pdf_scripts and content_mime == "application/pdf" and has_malicious_pdf(content):
            return self._reject(ValidationOutcome.PDF_SCRIPT_DETECTED, file, content_mime)

        if options.detect_svg_scripts and content_mime == "image/svg+xml" and has_malicious_svg(content):
            return self._reject(ValidationOutcome.SVG_SCRIPT_DETECTED, file, content_mime)

        return ValidationResult(ValidationOutcome.ACCEPTED, file)

    def _reject(self, outcome: ValidationOutcome, file: FileMetadata, mime_type: str) -> ValidationResult:
        logging.info(f"Rejected upload '{file.name}' ({mime_type}): {outcome.value}")
        return ValidationResult(outcome, file)
