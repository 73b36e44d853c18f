"""Schemas for the health and info endpoints."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field("OK", description="Always OK while the process is serving.")
    message: str
    model: str
    environment: str
    api_key_configured: bool


class InfoResponse(BaseModel):
    """Static description of the upstream provider."""

    provider: str
    model: str
    status: str = Field(..., description="active with an API key, simulated without one.")
    api_version: str
