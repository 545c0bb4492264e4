"""
Common Models
=============

Response bodies shared by the HTTP services.

Version: 0.1.0
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every error status."""

    success: bool = False
    error: str
    status_code: int
    error_code: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class HealthResponse(BaseModel):
    """Service health check response."""

    status: str = "healthy"
    service: str
    version: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    components: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @classmethod
    def from_components(
        cls,
        service: str,
        version: str,
        components: dict[str, dict[str, Any]],
    ) -> "HealthResponse":
        """Report `degraded` unless every component is healthy."""
        healthy = all(c.get("status") == "healthy" for c in components.values())
        return cls(
            status="healthy" if healthy else "degraded",
            service=service,
            version=version,
            components=components,
        )
