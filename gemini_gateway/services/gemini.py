"""Gemini model gateway."""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..models import ContentPart, GenerationRequest, GenerationResult
from ..utils.debug_logger import log_model_request, log_model_response

logger = logging.getLogger(__name__)


class ModelGateway(ABC):
    """Capability to turn an ordered list of content parts into generated text."""

    @abstractmethod
    async def generate(self, parts: Sequence[ContentPart]) -> GenerationResult:
        """Return the generated text, or a failed result carrying the remote message."""

    async def aclose(self) -> None:
        """Release transport resources, if any."""


class GeminiGateway(ModelGateway):
    """Gateway backed by the Gemini ``generateContent`` REST endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the gateway.

        Args:
            api_key: Gemini API key
            model: Model name, with or without the ``models/`` prefix
            base_url: API root, e.g. ``https://generativelanguage.googleapis.com/v1beta``
            timeout: Transport timeout in seconds
            client: Shared HTTP client; one is created when omitted
        """
        self.model = model.removeprefix("models/")
        self.url = f"{base_url.rstrip('/')}/models/{self.model}:generateContent"
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def generate(self, parts: Sequence[ContentPart]) -> GenerationResult:
        """
        Send the parts to Gemini and return the complete generated text.

        Transport and remote errors are returned as a failed result carrying
        the diagnostic message unchanged. No retries are attempted.
        """
        body = GenerationRequest(parts=list(parts)).to_gemini()
        request_id = f"gen_{uuid.uuid4().hex[:12]}"
        log_model_request(request_id, self.model, body)

        try:
            response = await self._client.post(
                self.url,
                json=body,
                headers={"x-goog-api-key": self._api_key},
            )
        except httpx.HTTPError as e:
            message = str(e) or type(e).__name__
            logger.warning(f"Gemini transport error: {message}")
            return GenerationResult.failure(message)

        if response.is_error:
            message = _error_message(response)
            logger.warning(f"Gemini returned {response.status_code}: {message}")
            return GenerationResult.failure(message)

        data = response.json()
        log_model_response(request_id, response.status_code, data)
        text = _extract_text(data)
        if text is None:
            reason = _empty_reason(data)
            logger.warning(f"Gemini returned no text: {reason}")
            return GenerationResult.failure(f"Response contained no text: {reason}")

        return GenerationResult.success(text)

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    """Pull the remote-supplied message out of an error response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase

    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return response.text


def _extract_text(data: Dict[str, Any]) -> Optional[str]:
    """Concatenate text parts of the first candidate."""
    candidates: List[Dict[str, Any]] = data.get("candidates") or []
    if not candidates:
        return None

    parts = (candidates[0].get("content") or {}).get("parts") or []
    texts = [part["text"] for part in parts if "text" in part]
    if not texts:
        return None
    return "".join(texts)


def _empty_reason(data: Dict[str, Any]) -> str:
    """
    Explain a response without text using Gemini's own fields.

    A candidate stopped early carries ``finishReason`` (SAFETY, RECITATION,
    MAX_TOKENS, ...). A prompt blocked before generation has no candidates and
    carries ``promptFeedback.blockReason`` instead.
    """
    candidates: List[Dict[str, Any]] = data.get("candidates") or []
    if candidates:
        candidate = candidates[0]
        reason = candidate.get("finishReason")
        if not reason:
            return "candidate contained no text parts"
        message = candidate.get("finishMessage")
        return f"{reason} ({message})" if message else reason

    feedback = data.get("promptFeedback") or {}
    reason = feedback.get("blockReason")
    if not reason:
        return "no candidates returned"
    message = feedback.get("blockReasonMessage")
    return f"{reason} ({message})" if message else reason
