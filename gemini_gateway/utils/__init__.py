"""Utility modules."""

from .debug_logger import (
    log_incoming_request,
    log_model_request,
    log_model_response,
)

__all__ = [
    "log_incoming_request",
    "log_model_request",
    "log_model_response",
]
