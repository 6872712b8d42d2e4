"""Response models for the gateway API."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    detail: str


class HealthResponse(BaseModel):
    """Response returned by the health probe."""

    status: str
