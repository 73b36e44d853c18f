"""
API handlers: read the request body, call the relay, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import logging
from functools import lru_cache

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.errors import MissingQueryError
from app.schemas.query import QueryRequest, QueryResponse
from app.services.relay import QueryRelay

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_relay() -> QueryRelay:
    """Process-wide relay built from startup settings. Overridden in tests."""
    return QueryRelay(get_settings())


async def read_query(request: Request) -> str | None:
    """
    Return the query field of a JSON object body, or None.
    Non-JSON bodies, non-object JSON and non-string query values all count as missing.
    """
    try:
        data = await request.json()
    except ValueError:
        logger.info("[api:read_query] body is not JSON")
        return None
    if not isinstance(data, dict):
        return None
    try:
        return QueryRequest.model_validate(data).query
    except ValidationError:
        logger.info("[api:read_query] query is not a string")
        return None


async def handle_query(request: Request, relay: QueryRelay) -> QueryResponse | JSONResponse:
    """
    Relay the query. Missing query maps to 400 {error}; every other outcome is a 200.
    """
    query = await read_query(request)
    try:
        result = await relay.handle(query)
    except MissingQueryError as e:
        return JSONResponse(status_code=400, content={"error": e.message})
    return QueryResponse(**result.to_body())
