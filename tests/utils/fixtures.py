"""
Common test fixtures for the MIME guard service.

This module provides sample file contents and helpers that store them the
way the upload layer does, so the validator can read them back from disk.
"""

import base64
import hashlib
from pathlib import Path

import pytest

from models.validation import FileMetadata

# Simple 1x1 pixel PNG image
PNG_CONTENT = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8/5+hHgAHggJ/PchI7wAAAABJRU5ErkJggg=="
)

# Minimal PDF content
PDF_CONTENT = (
    b"%PDF-1.4\n1 0 obj << /Type /Catalog /Pages 2 0 R >>\nendobj\n"
    b"2 0 obj << /Type /Pages /Kids [3 0 R] /Count 1 >>\nendobj\n"
    b"3 0 obj << /Type /Page /Parent 2 0 R >>\nendobj\n"
    b"trailer << /Size 4 /Root 1 0 R >>\n%%EOF"
)

PDF_WITH_JS_CONTENT = (
    b"%PDF-1.4\n1 0 obj << /Type /Catalog /OpenAction 2 0 R >>\nendobj\n"
    b"2 0 obj << /S /JavaScript /JS (app.alert('hi')) >>\nendobj\n"
    b"trailer << /Root 1 0 R >>\n%%EOF"
)

SVG_CONTENT = b'<svg xmlns="http://www.w3.org/2000/svg"><rect width="10" height="10"/></svg>'

SVG_WITH_SCRIPT_CONTENT = b'<svg xmlns="http://www.w3.org/2000/svg"><script>alert(1)</script></svg>'

CSV_CONTENT = b"name,email,age\nalice,alice@example.com,30\nbob,bob@example.com,41\n"


def store_upload(directory: Path, filename: str, content: bytes, mimetype: str = "") -> FileMetadata:
    """Write ``content`` to ``directory`` and describe it like the upload layer would."""
    path = directory / f"upload-{hashlib.sha1(filename.encode()).hexdigest()[:8]}"
    path.write_bytes(content)
    return FileMetadata(
        name=filename,
        size=len(content),
        encoding="7bit",
        mimetype=mimetype,
        md5=hashlib.md5(content).hexdigest(),
        temp_file_path=str(path),
    )


@pytest.fixture
def make_upload(tmp_path):
    """
    Fixture providing a factory for stored uploads.

    Returns:
        Callable: ``make_upload(filename, content, mimetype="")`` -> FileMetadata
    """

    def _make(filename: str, content: bytes, mimetype: str = "") -> FileMetadata:
        return store_upload(tmp_path, filename, content, mimetype)

    return _make
