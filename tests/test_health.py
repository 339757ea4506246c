"""Tests for health and root endpoints."""

import pytest
from fastapi.testclient import TestClient


class TestHealthEndpoints:
    """Test health and info endpoints."""

    def test_root_endpoint(self, client: TestClient):
        """GET / should return API info."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Gemini Gateway"
        assert data["version"] == "1.0.0"
        assert data["endpoints"]["text"] == "/generate-text"
        assert data["endpoints"]["image"] == "/generate-from-image"
        assert data["endpoints"]["document"] == "/generate-from-document"
        assert data["endpoints"]["audio"] == "/generate-from-audio"
        assert data["endpoints"]["health"] == "/health"

    def test_health_endpoint(self, client: TestClient):
        """GET /health should return healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_openapi_docs(self, client: TestClient):
        """GET /docs should return OpenAPI documentation."""
        response = client.get("/docs")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]

    def test_openapi_json(self, client: TestClient):
        """GET /openapi.json should list the generation endpoints."""
        response = client.get("/openapi.json")
        assert response.status_code == 200
        data = response.json()
        assert data["info"]["title"] == "Gemini Gateway"
        for path in (
            "/generate-text",
            "/generate-from-image",
            "/generate-from-document",
            "/generate-from-audio",
        ):
            assert path in data["paths"]
