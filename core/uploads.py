"""Spooling of multipart uploads into temp files for validation."""

import hashlib
import logging
import os
import tempfile
from typing import Iterable, Optional

from starlette.datastructures import UploadFile

from models.validation import FileMetadata

CHUNK_SIZE = 64 * 1024
DEFAULT_TRANSFER_ENCODING = "7bit"


async def spool_upload(upload: UploadFile, temp_dir: Optional[str] = None) -> FileMetadata:
    """
    Copy an upload to a temp file, computing its size and MD5 on the way.

    Args:
        upload: Multipart file part
        temp_dir: Directory for the temp file, system default when None

    Returns:
        FileMetadata: Metadata pointing at the temp file
    """
    digest = hashlib.md5()
    size = 0
    fd, path = tempfile.mkstemp(prefix="upload-", dir=temp_dir)
    try:
        with os.fdopen(fd, "wb") as out:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                digest.update(chunk)
                size += len(chunk)
                out.write(chunk)
    except BaseException:
        os.remove(path)
        raise

    headers = upload.headers or {}
    return FileMetadata(
        name=upload.filename or "",
        size=size,
        encoding=headers.get("content-transfer-encoding", DEFAULT_TRANSFER_ENCODING),
        mimetype=upload.content_type or "",
        md5=digest.hexdigest(),
        temp_file_path=path,
    )


def remove_spooled(files: Iterable[FileMetadata]) -> None:
    """Delete temp files created by ``spool_upload``."""
    for file in files:
        if not file.temp_file_path:
            continue
        try:
            os.remove(file.temp_file_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logging.warning(f"Could not remove temp file {file.temp_file_path}: {e}")
