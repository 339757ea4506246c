"""Debug logging utility for request/response payload inspection."""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..config import settings

logger = logging.getLogger("debug.payloads")

# Inline media is base64 and can be megabytes long
MEDIA_PREVIEW_LENGTH = 32


def _truncate(text: str, max_length: int = 0) -> str:
    """Truncate text if max_length is set."""
    if max_length <= 0 or len(text) <= max_length:
        return text
    return text[:max_length] + f"... [truncated, total {len(text)} chars]"


def _safe_json(obj: Any, indent: int = 2) -> str:
    """Safely serialize object to JSON string."""
    try:
        return json.dumps(obj, ensure_ascii=False, indent=indent, default=str)
    except (TypeError, ValueError) as e:
        return f"<serialization error: {e}>"


def _redact_media(body: Dict[str, Any]) -> Dict[str, Any]:
    """Copy a generateContent body with inline data shortened."""
    contents = []
    for content in body.get("contents", []):
        parts = []
        for part in content.get("parts", []):
            inline = part.get("inline_data")
            if inline:
                data = inline.get("data", "")
                part = {
                    "inline_data": {
                        "mime_type": inline.get("mime_type"),
                        "data": _truncate(data, MEDIA_PREVIEW_LENGTH),
                    }
                }
            parts.append(part)
        contents.append({**content, "parts": parts})
    return {**body, "contents": contents}


def log_incoming_request(
    request_id: str,
    path: str,
    prompt: Optional[str] = None,
    filename: Optional[str] = None,
    media_type: Optional[str] = None,
) -> None:
    """Log incoming external request."""
    if not settings.DEBUG_LOG_PAYLOADS:
        return

    timestamp = datetime.now().isoformat()
    max_len = settings.DEBUG_LOG_MAX_LENGTH

    log_parts = [
        f"\n{'='*60}",
        f"[{timestamp}] INCOMING REQUEST: {request_id}",
        f"{'='*60}",
        f"Path: {path}",
    ]

    if prompt is not None:
        log_parts.append(f"Prompt:\n{_truncate(prompt, max_len)}")
    if filename is not None:
        log_parts.append(f"File: {filename} ({media_type})")

    log_parts.append("=" * 60)
    logger.info("\n".join(log_parts))


def log_model_request(
    request_id: str,
    model: str,
    body: Dict[str, Any],
) -> None:
    """Log request sent to the model."""
    if not settings.DEBUG_LOG_PAYLOADS:
        return

    timestamp = datetime.now().isoformat()
    max_len = settings.DEBUG_LOG_MAX_LENGTH

    log_parts = [
        f"\n{'>'*60}",
        f"[{timestamp}] MODEL REQUEST: {request_id}",
        f"{'>'*60}",
        f"Model: {model}",
        f"Body:\n{_truncate(_safe_json(_redact_media(body)), max_len)}",
        ">" * 60,
    ]
    logger.info("\n".join(log_parts))


def log_model_response(
    request_id: str,
    status_code: int,
    body: Optional[Any] = None,
) -> None:
    """Log response received from the model."""
    if not settings.DEBUG_LOG_PAYLOADS:
        return

    timestamp = datetime.now().isoformat()
    max_len = settings.DEBUG_LOG_MAX_LENGTH

    log_parts = [
        f"\n{'<'*60}",
        f"[{timestamp}] MODEL RESPONSE: {request_id}",
        f"{'<'*60}",
        f"Status: {status_code}",
    ]

    if body is not None:
        log_parts.append(f"Body:\n{_truncate(_safe_json(body), max_len)}")

    log_parts.append("<" * 60)
    logger.info("\n".join(log_parts))
