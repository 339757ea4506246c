"""Content parts sent to the generative model."""

from typing import List, Literal, Union

from pydantic import BaseModel, Field, field_validator


class TextPart(BaseModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


class InlineMediaPart(BaseModel):
    """Binary content embedded as base64 and tagged with its MIME type."""

    type: Literal["inline_media"] = "inline_media"
    data: str  # base64 encoded
    media_type: str

    @field_validator("media_type")
    @classmethod
    def check_media_type(cls, v: str) -> str:
        """Reject empty MIME types."""
        if not v or not v.strip():
            raise ValueError("media_type must be a non-empty MIME type")
        return v

    def to_gemini(self) -> dict:
        """Convert to a Gemini ``inline_data`` part."""
        return {"inline_data": {"mime_type": self.media_type, "data": self.data}}


ContentPart = Union[TextPart, InlineMediaPart]


class GenerationRequest(BaseModel):
    """Ordered content parts sent to the model as one unit."""

    parts: List[ContentPart] = Field(..., min_length=1)

    def to_gemini(self) -> dict:
        """Build the ``generateContent`` request body."""
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": part.text} if isinstance(part, TextPart) else part.to_gemini()
                        for part in self.parts
                    ],
                }
            ]
        }
