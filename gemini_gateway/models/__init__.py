"""Data models for Gemini Gateway."""

from .content import ContentPart, GenerationRequest, InlineMediaPart, TextPart
from .request import TextGenerationRequest
from .response import ErrorResponse, GenerationOutput, GenerationResult

__all__ = [
    # Content
    "ContentPart",
    "GenerationRequest",
    "InlineMediaPart",
    "TextPart",
    # Request
    "TextGenerationRequest",
    # Response
    "ErrorResponse",
    "GenerationOutput",
    "GenerationResult",
]
