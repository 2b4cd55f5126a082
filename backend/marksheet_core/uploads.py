import logging
import os
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Optional, Sequence

from .config import ALLOWED_CONTENT_TYPES, MAX_UPLOAD_BYTES
from .errors import FileTooLarge, InvalidFileType, MissingFile

# Configure logger
logger = logging.getLogger("uvicorn.error")

INVALID_TYPE_MESSAGE = "Invalid file type. Only JPEG, PNG, WebP, and PDF are allowed."
TOO_LARGE_MESSAGE = "File too large. Maximum size is 10MB."

CHUNK_SIZE = 64 * 1024


def validate_upload(
    content_type: Optional[str],
    size: Optional[int],
    allowed_types: Sequence[str] = ALLOWED_CONTENT_TYPES,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> None:
    """
    Raises InvalidFileType or FileTooLarge. Type is checked first, so a large
    file of the wrong type is reported as a type error. An unknown size passes;
    the server re-checks while staging.
    """
    if content_type not in allowed_types:
        raise InvalidFileType(INVALID_TYPE_MESSAGE)
    if size is not None and size > max_bytes:
        raise FileTooLarge(TOO_LARGE_MESSAGE)


@dataclass(frozen=True)
class StagedUpload:
    path: str
    filename: str
    content_type: str
    size: int


def _temp_name(filename: str) -> str:
    _, ext = os.path.splitext(filename or "")
    return f"{uuid.uuid4().hex}{ext.lower()}"


@contextmanager
def staged_upload(
    stream: Optional[BinaryIO],
    filename: Optional[str],
    content_type: Optional[str],
    upload_dir: str,
    allowed_types: Sequence[str] = ALLOWED_CONTENT_TYPES,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> Iterator[StagedUpload]:
    """
    Copy an incoming upload into upload_dir and yield it. The file is removed
    when the block exits, however it exits.
    """
    if stream is None or not filename:
        raise MissingFile()
    validate_upload(content_type, None, allowed_types, max_bytes)

    os.makedirs(upload_dir, exist_ok=True)
    path = os.path.join(upload_dir, _temp_name(filename))
    try:
        size = 0
        with open(path, "wb") as out:
            while True:
                chunk = stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_bytes:
                    raise FileTooLarge(TOO_LARGE_MESSAGE)
                out.write(chunk)
        logger.info(f"File staged: {filename} | Type: {content_type} | {size} bytes")
        yield StagedUpload(path=path, filename=filename, content_type=content_type, size=size)
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
