"""
Tests for the Gemini client using httpx.MockTransport (no real network).
"""

import asyncio
import json

import httpx
import pytest

from app.core.config import GEMINI_API_URL
from app.core.errors import UpstreamError
from app.services.gemini import DEFAULT_UPSTREAM_ERROR, GeminiClient, UpstreamRequest


def make_client(handler) -> GeminiClient:
    return GeminiClient(api_key="secret-key", transport=httpx.MockTransport(handler))


def test_generate_posts_payload_with_key_header() -> None:
    """One POST to the generateContent URL, key in X-goog-api-key, persona prompt in body."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "Olá"}]}}]})

    request = UpstreamRequest.from_query("Quem construiu a fortaleza?")
    data = asyncio.run(make_client(handler).generate(request))

    assert data["candidates"][0]["content"]["parts"][0]["text"] == "Olá"
    assert len(seen) == 1
    sent = seen[0]
    assert sent.method == "POST"
    assert str(sent.url) == GEMINI_API_URL
    assert sent.headers["X-goog-api-key"] == "secret-key"
    assert sent.headers["Content-Type"] == "application/json"
    assert json.loads(sent.content) == request.to_payload()


def test_error_status_uses_upstream_message() -> None:
    """Non-2xx with {error: {message}} raises UpstreamError carrying that message."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"code": 400, "message": "API key not valid."}})

    with pytest.raises(UpstreamError) as info:
        asyncio.run(make_client(handler).generate(UpstreamRequest.from_query("x")))
    assert info.value.message == "API key not valid."
    assert info.value.status_code == 400


@pytest.mark.parametrize("body", [b"internal error", b"{}", b'{"error": "flat"}'])
def test_error_status_without_message_uses_default(body: bytes) -> None:
    """Non-2xx without a usable error.message falls back to the generic message."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, content=body)

    with pytest.raises(UpstreamError) as info:
        asyncio.run(make_client(handler).generate(UpstreamRequest.from_query("x")))
    assert info.value.message == DEFAULT_UPSTREAM_ERROR
    assert info.value.status_code == 500


def test_transport_error_propagates() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        asyncio.run(make_client(handler).generate(UpstreamRequest.from_query("x")))


def test_invalid_json_propagates_as_value_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>not json</html>")

    with pytest.raises(ValueError):
        asyncio.run(make_client(handler).generate(UpstreamRequest.from_query("x")))
