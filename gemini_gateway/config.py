"""Configuration management for Gemini Gateway."""

import os
from typing import Optional

from dotenv import load_dotenv

from .errors import StartupConfigMissing

load_dotenv()


class Settings:
    """Application settings."""

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = 3000

    # Gemini
    GEMINI_API_KEY: Optional[str] = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_BASE_URL: str = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    # Seconds; httpx's own default (5s) is too short for generation calls
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "60"))

    # Uploads are staged here until the response is prepared
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")

    # Debug
    DEBUG_MODE: bool = os.getenv("DEBUG_MODE", "false").lower() == "true"
    DEBUG_LOG_PAYLOADS: bool = os.getenv("DEBUG_LOG_PAYLOADS", "false").lower() == "true"
    DEBUG_LOG_MAX_LENGTH: int = int(os.getenv("DEBUG_LOG_MAX_LENGTH", "2000"))

    # Logging
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "false").lower() == "true"
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    LOG_FILE: str = os.getenv("LOG_FILE", "gateway.log")

    def require_api_key(self) -> str:
        """Return the Gemini API key or fail startup when it is not set."""
        if not self.GEMINI_API_KEY:
            raise StartupConfigMissing("GEMINI_API_KEY is not defined in .env file")
        return self.GEMINI_API_KEY


settings = Settings()
