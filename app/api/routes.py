"""
API route aggregator: register endpoints; no logic — only delegate to handlers.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse

from app.api.handlers import get_relay, handle_query
from app.core.config import (
    GEMINI_API_VERSION,
    GEMINI_MODEL,
    GEMINI_PROVIDER,
    Settings,
    get_settings,
)
from app.schemas.query import ErrorResponse, QueryRequest, QueryResponse
from app.schemas.system import HealthResponse, InfoResponse
from app.services.relay import QueryRelay

logger = logging.getLogger(__name__)
router = APIRouter()

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"
INDEX_FILE = STATIC_DIR / "index.html"


# --- System ---

@router.get("/", tags=["system"], include_in_schema=False)
def root() -> FileResponse:
    return FileResponse(INDEX_FILE)


@router.get("/health", response_model=HealthResponse, tags=["system"])
def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="OK",
        message="Servidor funcionando com Gemini API",
        model=GEMINI_MODEL,
        environment=settings.environment,
        api_key_configured=settings.api_key_configured,
    )


@router.get("/api/info", response_model=InfoResponse, tags=["system"])
def info(settings: Settings = Depends(get_settings)) -> InfoResponse:
    return InfoResponse(
        provider=GEMINI_PROVIDER,
        model=GEMINI_MODEL,
        status="active" if settings.api_key_configured else "simulated",
        api_version=GEMINI_API_VERSION,
    )


# --- Query ---

@router.post(
    "/api/query",
    response_model=QueryResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": QueryRequest.model_json_schema()}},
        }
    },
    tags=["query"],
    summary="Ask the fortress assistant",
    description="Relay the question to Gemini. Always 200 with an answer (fallback on upstream failure); 400 if query is missing.",
)
async def post_query(
    request: Request,
    relay: QueryRelay = Depends(get_relay),
) -> QueryResponse | JSONResponse:
    return await handle_query(request, relay)


# --- Static files and catch-all (must stay last) ---

@router.get("/{path:path}", include_in_schema=False, response_model=None)
def static_or_redirect(path: str) -> FileResponse | RedirectResponse:
    """Serve a file from the static dir if one exists at path, else redirect to the entry page."""
    candidate = (STATIC_DIR / path).resolve()
    if candidate.is_file() and candidate.is_relative_to(STATIC_DIR):
        return FileResponse(candidate)
    logger.info("[api:static_or_redirect] %r not found, redirecting to /", path)
    return RedirectResponse(url="/")
