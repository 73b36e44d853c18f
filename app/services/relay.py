"""
Query relay: turn a user query into a Gemini answer, or a canned one.

Responsibility: Validate the query, short-circuit to simulated answers when no
API key is configured, make exactly one upstream call otherwise, and fall back
to a canned answer on any upstream failure. Called by the API; no HTTP here.
"""

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Union

from app.core.config import Settings
from app.core.errors import MissingQueryError, UpstreamError
from app.services.gemini import GeminiClient, UpstreamClient, UpstreamRequest

logger = logging.getLogger(__name__)

Chooser = Callable[[Sequence[str]], str]

EXTRACTION_PLACEHOLDER = "❌ Não foi possível obter resposta"

SIMULATOR_NOTE = "Modo simulador: configure GEMINI_API_KEY para respostas reais"

SIMULATED_RESPONSES: tuple[str, ...] = (
    "Saudações, aventureiro! As fortalezas mágicas guardam muitos segredos.",
    "Os portões da fortaleza se abrem para quem busca conhecimento.",
    "Cada torre deste reino esconde um encantamento antigo.",
    "Os guardiões das fortalezas ouviram sua pergunta e sorriem.",
)

FALLBACK_RESPONSES: tuple[str, ...] = (
    "Como mestre das fortalezas mágicas, estou aqui para ajudar!",
    "A magia dessas terras responde à sua curiosidade.",
    "Sua jornada é importante para o reino mágico.",
    "As fortalezas aguardam seu comando, grande aventureiro!",
)


@dataclass(frozen=True)
class Success:
    text: str

    def to_body(self) -> dict[str, str]:
        return {"answer": self.text}


@dataclass(frozen=True)
class Simulated:
    text: str
    note: str = SIMULATOR_NOTE

    def to_body(self) -> dict[str, str]:
        return {"answer": self.text, "note": self.note}


@dataclass(frozen=True)
class Failed:
    text: str
    reason: str

    def to_body(self) -> dict[str, str]:
        return {"answer": self.text, "error": self.reason}


RelayResult = Union[Success, Simulated, Failed]

# Outcome marker for "no upstream call was made".
NO_CALL = object()


def extract_answer(data: Any) -> str:
    """Return candidates[0].content.parts[0].text, or the placeholder if the path is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return EXTRACTION_PLACEHOLDER
    if not isinstance(text, str):
        return EXTRACTION_PLACEHOLDER
    return text


def describe_failure(exc: BaseException) -> str:
    """Non-empty, caller-facing description of an upstream failure."""
    if isinstance(exc, UpstreamError):
        return exc.message
    return str(exc) or exc.__class__.__name__


def decide(outcome: Any, chooser: Chooser = random.choice) -> RelayResult:
    """
    Map an upstream outcome to a RelayResult.

    outcome is NO_CALL when no upstream call was made (no API key), an
    exception when the call failed, and the parsed response body otherwise.
    """
    if outcome is NO_CALL:
        return Simulated(chooser(SIMULATED_RESPONSES))
    if isinstance(outcome, BaseException):
        return Failed(chooser(FALLBACK_RESPONSES), describe_failure(outcome))
    return Success(extract_answer(outcome))


class QueryRelay:
    """Relays one query per call to the upstream API. Holds no per-request state."""

    def __init__(
        self,
        settings: Settings,
        client: UpstreamClient | None = None,
        chooser: Chooser = random.choice,
    ) -> None:
        self.settings = settings
        self.chooser = chooser
        if client is None and settings.api_key_configured:
            client = GeminiClient(
                api_key=settings.api_key,
                api_url=settings.api_url,
                timeout=settings.timeout,
            )
        self.client = client

    async def handle(self, query: str | None) -> RelayResult:
        if not query:
            logger.info("[relay:handle] rejected empty query")
            raise MissingQueryError()
        if not self.settings.api_key_configured or self.client is None:
            logger.info("[relay:handle] IN  query=%r mode=simulated", query)
            return decide(NO_CALL, self.chooser)

        logger.info("[relay:handle] IN  query=%r", query)
        request = UpstreamRequest.from_query(query)
        try:
            data = await self.client.generate(request)
        except Exception as e:
            logger.warning("[relay:handle] upstream failed, using fallback: %s", describe_failure(e))
            return decide(e, self.chooser)
        logger.info("[relay:handle] upstream response=%r", data)
        result = decide(data, self.chooser)
        logger.info("[relay:handle] OUT answer_len=%d", len(result.text))
        return result
