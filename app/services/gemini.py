"""
Gemini client: one generateContent call per request.

Builds the persona-wrapped request, POSTs it with the API key header, and
returns the parsed JSON body. Non-2xx answers raise UpstreamError; transport
and JSON errors propagate unchanged so the relay can fall back.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from app.core.config import (
    DEFAULT_UPSTREAM_TIMEOUT,
    GEMINI_API_URL,
    MAX_OUTPUT_TOKENS,
    TEMPERATURE,
)
from app.core.errors import UpstreamError

logger = logging.getLogger(__name__)

PERSONA_PREFIX = (
    "Como assistente especializado em Fortalezas Mágicas, "
    "responda de forma helpful e mágica: "
)
DEFAULT_UPSTREAM_ERROR = "Erro na API Gemini"


def build_prompt(query: str) -> str:
    """Embed the query verbatim into the persona instruction."""
    return f"{PERSONA_PREFIX}{query}"


@dataclass(frozen=True)
class UpstreamRequest:
    """Immutable generateContent request derived from a user query."""

    prompt: str
    max_output_tokens: int = MAX_OUTPUT_TOKENS
    temperature: float = TEMPERATURE

    @classmethod
    def from_query(cls, query: str) -> "UpstreamRequest":
        return cls(prompt=build_prompt(query))

    def to_payload(self) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": self.prompt}]}],
            "generationConfig": {
                "maxOutputTokens": self.max_output_tokens,
                "temperature": self.temperature,
            },
        }


class UpstreamClient(Protocol):
    async def generate(self, request: UpstreamRequest) -> dict[str, Any]: ...


def _error_message(response: httpx.Response) -> str:
    """Pull error.message out of a Gemini error body, else a generic message."""
    try:
        data = response.json()
    except ValueError:
        return DEFAULT_UPSTREAM_ERROR
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
    return DEFAULT_UPSTREAM_ERROR


class GeminiClient:
    """Async client for the Gemini generateContent endpoint."""

    def __init__(
        self,
        api_key: str,
        api_url: str = GEMINI_API_URL,
        timeout: float = DEFAULT_UPSTREAM_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    async def generate(self, request: UpstreamRequest) -> dict[str, Any]:
        headers = {"Content-Type": "application/json", "X-goog-api-key": self.api_key}
        payload = request.to_payload()
        logger.info("[gemini:generate] IN  prompt_len=%d", len(request.prompt))
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.api_url, json=payload, headers=headers)
        if response.is_error:
            message = _error_message(response)
            logger.warning("[gemini:generate] upstream error %s: %s", response.status_code, response.text[:200])
            raise UpstreamError(message, status_code=response.status_code)
        data = response.json()
        logger.info("[gemini:generate] OUT status=%d", response.status_code)
        return data
