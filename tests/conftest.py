"""Pytest configuration and fixtures for gateway tests."""

import asyncio
import base64
import os
import sys
from pathlib import Path
from typing import AsyncGenerator, Generator, List, Optional, Sequence

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Settings are read at import time
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")

from gemini_gateway.config import settings
from gemini_gateway.main import app
from gemini_gateway.models import ContentPart, GenerationResult, InlineMediaPart, TextPart
from gemini_gateway.routes.generate import get_gateway
from gemini_gateway.services.gemini import ModelGateway

# Base URL for tests
BASE_URL = "http://test"

# Small 1x1 PNG
RED_PIXEL_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8DwHwAFBQIAX8jx0gAAAABJRU5ErkJggg=="
)


class FakeGateway(ModelGateway):
    """Records every call and answers with a canned result."""

    def __init__(self, output: str = "generated text", error: Optional[str] = None, delay: float = 0):
        self.output = output
        self.error = error
        self.delay = delay
        self.calls: List[List[ContentPart]] = []

    async def generate(self, parts: Sequence[ContentPart]) -> GenerationResult:
        self.calls.append(list(parts))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            return GenerationResult.failure(self.error)
        return GenerationResult.success(self.output)

    @property
    def last_prompt(self) -> str:
        first = self.calls[-1][0]
        assert isinstance(first, TextPart)
        return first.text

    @property
    def last_media(self) -> InlineMediaPart:
        media = self.calls[-1][1]
        assert isinstance(media, InlineMediaPart)
        return media


class EchoGateway(ModelGateway):
    """Answers with the media type and size of the uploaded part."""

    async def generate(self, parts: Sequence[ContentPart]) -> GenerationResult:
        await asyncio.sleep(0.05)
        media = parts[-1]
        return GenerationResult.success(f"{media.media_type}:{len(media.data)}")


@pytest.fixture
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the staging area at an empty temporary directory."""
    staging = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(staging))
    return staging


@pytest.fixture
def fake_gateway() -> Generator[FakeGateway, None, None]:
    """Install a successful fake gateway."""
    gateway = FakeGateway()
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield gateway
    app.dependency_overrides.pop(get_gateway, None)


@pytest.fixture
def failing_gateway() -> Generator[FakeGateway, None, None]:
    """Install a fake gateway whose calls fail."""
    gateway = FakeGateway(error="Resource has been exhausted (e.g. check quota).")
    app.dependency_overrides[get_gateway] = lambda: gateway
    yield gateway
    app.dependency_overrides.pop(get_gateway, None)


@pytest.fixture
def client(upload_dir: Path) -> Generator[TestClient, None, None]:
    """Create synchronous test client."""
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def async_client(upload_dir: Path) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as ac:
        yield ac


def staged_files(directory: Path) -> list:
    """Files left in the staging directory."""
    if not directory.exists():
        return []
    return list(directory.iterdir())
