"""Tests for the FastAPI streaming example.

Skips gracefully if fastapi or httpx are not installed.
"""

import pytest

fastapi = pytest.importorskip("fastapi")
httpx = pytest.importorskip("httpx")

from starlette.testclient import TestClient


class TestFastApiStreamingApp:
    """Verify FastAPI streaming integration with trickle."""

    @pytest.fixture
    def client(self, example_app) -> TestClient:
        """Create a test client from the example FastAPI app."""
        return TestClient(example_app.app)

    def test_streaming_endpoint_returns_html(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]

    def test_streaming_endpoint_has_content(self, client: TestClient) -> None:
        response = client.get("/")
        assert "<h1>Dashboard</h1>" in response.text
        assert "<tr><td>Revenue</td><td>$1.2M</td></tr>" in response.text

    def test_streaming_endpoint_has_all_items(self, client: TestClient) -> None:
        response = client.get("/")
        assert "Users" in response.text
        assert "Orders" in response.text

    def test_full_endpoint_returns_html(self, client: TestClient) -> None:
        response = client.get("/full")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]

    def test_both_endpoints_produce_same_content(self, client: TestClient) -> None:
        assert client.get("/").text == client.get("/full").text
