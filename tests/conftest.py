"""
Test configuration and fixtures for the MIME guard service.

This module provides common fixtures and configuration for all tests.
"""

import os
import sys
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Add the parent directory to the path so we can import main
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import create_app  # noqa: E402
from models.validation import FileMetadata  # noqa: E402
from tests.utils.fixtures import PNG_CONTENT, make_upload  # noqa: E402,F401
from validation.validators import MimeValidator  # noqa: E402


@pytest.fixture
def test_client() -> Generator[TestClient, None, None]:
    """
    FastAPI test client fixture for synchronous testing.

    Yields:
        TestClient: Configured FastAPI test client
    """
    with TestClient(create_app()) as client:
        yield client


@pytest.fixture
def validator() -> MimeValidator:
    """
    Fixture providing a validator with default configuration.

    Returns:
        MimeValidator: Validator instance
    """
    return MimeValidator()


@pytest.fixture
def png_upload(make_upload) -> FileMetadata:
    """
    Fixture providing a stored PNG upload.

    Returns:
        FileMetadata: Metadata of the stored file
    """
    return make_upload("photo.png", PNG_CONTENT, "image/png")
