"""Wire envelope and normalized error shapes for the prediction API."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ApiEnvelope(BaseModel):
    """Response envelope returned by every API endpoint."""

    success: bool
    data: Any | None = None
    error: str | None = None
    message: str | None = None
    timestamp: str | None = None


class ApiError(BaseModel):
    """Normalized transport failure."""

    code: str = Field(description="Error code, e.g. HTTP_500, TIMEOUT, NETWORK_ERROR")
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
