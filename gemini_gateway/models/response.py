"""Response bodies and model call results."""

from typing import Optional

from pydantic import BaseModel


class GenerationOutput(BaseModel):
    """Successful endpoint response."""

    output: str


class ErrorResponse(BaseModel):
    """Failed endpoint response."""

    error: str


class GenerationResult(BaseModel):
    """Outcome of one model call: generated text or a failure message."""

    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, text: str) -> "GenerationResult":
        return cls(text=text)

    @classmethod
    def failure(cls, message: str) -> "GenerationResult":
        return cls(error=message)
