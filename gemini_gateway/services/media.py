"""Conversion of staged uploads into inline media parts."""

import base64
import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from ..errors import InvalidMediaType
from ..models import InlineMediaPart
from .staging import UploadedFile

logger = logging.getLogger(__name__)


class MediaEncoder:
    """Encodes staged uploads for the model."""

    @staticmethod
    async def encode(
        file: UploadedFile, required_prefix: Optional[str] = None
    ) -> InlineMediaPart:
        """
        Read a staged file and return it as a base64 inline media part.

        Args:
            file: Staged upload; it is left in place for the caller to release
            required_prefix: MIME prefix the declared type must start with

        Raises:
            InvalidMediaType: declared type lacks ``required_prefix``
        """
        media_type = file.media_type
        if required_prefix and not media_type.startswith(required_prefix):
            raise InvalidMediaType(
                f"Uploaded file type {media_type!r} does not match {required_prefix}*"
            )

        data = await run_in_threadpool(file.path.read_bytes)
        logger.debug(f"Encoded {file.filename!r} as {media_type} ({len(data)} bytes)")

        return InlineMediaPart(
            data=base64.b64encode(data).decode("ascii"),
            media_type=media_type,
        )
