"""Staging area for uploaded files and their guaranteed cleanup."""

import logging
import mimetypes
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Union

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from ..errors import CleanupFailed

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "application/octet-stream"


@dataclass
class UploadedFile:
    """An upload written to the staging area, owned by a single request."""

    path: Path
    media_type: str
    filename: str
    released: bool = False


async def stage_upload(upload: UploadFile, directory: Union[str, Path]) -> UploadedFile:
    """
    Write an upload to a uniquely named file in the staging directory.

    A write that fails part-way releases whatever was written before the
    error propagates.
    """
    staging_dir = Path(directory)
    staging_dir.mkdir(parents=True, exist_ok=True)

    data = await upload.read()
    file = UploadedFile(
        path=staging_dir / uuid.uuid4().hex,
        media_type=_declared_media_type(upload),
        filename=upload.filename or "",
    )
    try:
        await run_in_threadpool(file.path.write_bytes, data)
    except BaseException:
        release(file)
        raise
    logger.debug(f"Staged upload {upload.filename!r} at {file.path} ({len(data)} bytes)")

    return file


def _declared_media_type(upload: UploadFile) -> str:
    """Declared content type, guessed from the filename when the part has none."""
    if upload.content_type:
        return upload.content_type
    guessed, _ = mimetypes.guess_type(upload.filename or "")
    return guessed or DEFAULT_MEDIA_TYPE


def release(file: UploadedFile) -> None:
    """
    Delete a staged file.

    Only the first call for a given file touches the file system. A file that
    is already gone counts as released; any other failure is logged and the
    response carries on.
    """
    if file.released:
        return
    file.released = True

    try:
        file.path.unlink(missing_ok=True)
    except OSError as e:
        error = CleanupFailed(f"Failed to delete staged upload {file.path}: {e}")
        logger.error(error.message)
        return
    logger.debug(f"Released staged upload {file.path}")


@asynccontextmanager
async def staged_upload(
    upload: UploadFile, directory: Union[str, Path]
) -> AsyncIterator[UploadedFile]:
    """Stage an upload for the duration of the block, then release it."""
    file = await stage_upload(upload, directory)
    try:
        yield file
    finally:
        try:
            await run_in_threadpool(release, file)
        finally:
            # A cancelled await never reaches the worker; release is idempotent
            release(file)
