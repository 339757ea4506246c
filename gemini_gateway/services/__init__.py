"""Services for Gemini Gateway."""

from .gemini import GeminiGateway, ModelGateway
from .media import MediaEncoder
from .staging import UploadedFile, release, stage_upload, staged_upload

__all__ = [
    "GeminiGateway",
    "MediaEncoder",
    "ModelGateway",
    "UploadedFile",
    "release",
    "stage_upload",
    "staged_upload",
]
