"""Request bodies accepted by the generation endpoints."""

from typing import Optional

from pydantic import BaseModel


class TextGenerationRequest(BaseModel):
    """JSON body of ``POST /generate-text``."""

    # Optional here so a missing prompt yields the gateway's own error body
    prompt: Optional[str] = None
