"""Gemini Gateway: HTTP gateway forwarding prompts and media to Gemini."""

__version__ = "1.0.0"
