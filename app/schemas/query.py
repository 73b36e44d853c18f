"""Schemas for the query endpoint."""

from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Request body for POST /api/query. Presence of query is checked by the relay so a missing one maps to 400."""

    query: str | None = Field(None, description="User question for the fortress assistant.")


class QueryResponse(BaseModel):
    """Response for POST /api/query. note is set in simulated mode, error when the upstream call failed."""

    answer: str = Field(..., description="Generated answer, or a canned one.")
    note: str | None = Field(None, description="Simulated-mode marker (no API key configured).")
    error: str | None = Field(None, description="Upstream failure message when a fallback answer was used.")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"answer": "Bem-vindo à fortaleza."},
                {"answer": "A magia dessas terras responde à sua curiosidade.", "error": "Erro na API Gemini"},
            ]
        }
    }


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Client error message.")
