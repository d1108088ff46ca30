"""Health and error payloads shared by every router."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

API_VERSION = "0.1.0"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Upstream(str, Enum):
    """External systems a request can depend on."""

    DATABASE = "database"
    STORAGE = "storage"
    TMDB = "tmdb"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class HealthResponse(BaseModel):
    """Liveness payload. Never touches an upstream."""

    status: HealthStatus
    timestamp: datetime = Field(default_factory=_utcnow)
    version: str = Field(default=API_VERSION)


class CheckResult(BaseModel):
    """Reachability of one upstream."""

    name: Upstream = Field(description="Which upstream was checked")
    healthy: bool
    latency_ms: float | None = Field(default=None, description="Round trip in milliseconds")
    error: str | None = Field(default=None, description="Upstream error text when unhealthy")


class ReadinessResponse(BaseModel):
    """Readiness payload: database, avatar storage and TMDB."""

    status: HealthStatus
    timestamp: datetime = Field(default_factory=_utcnow)
    checks: list[CheckResult] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """One item of extra context on an error.

    For database failures `type` carries the Postgres error code (e.g.
    `23505` for a unique violation) and `msg` the upstream hint or detail.
    """

    model_config = ConfigDict(from_attributes=True)

    loc: list[str] | None = Field(default=None, description="Field path for input errors")
    msg: str
    type: str = Field(default="error")


class ErrorResponse(BaseModel):
    """Body of every error response.

    The client shows `message` in a single notification; `upstream` says
    which external system failed, when one did.
    """

    error: str = Field(description="Error category, e.g. not_found or external_service_error")
    message: str
    upstream: Upstream | None = Field(default=None, description="Failing upstream, if any")
    details: list[ErrorDetail] | None = None
    request_id: str | None = Field(default=None, description="Echo of X-Request-ID")
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def build(
        cls,
        error_type: str,
        message: str,
        upstream: Upstream | None = None,
        details: list[dict[str, Any]] | None = None,
        request_id: str | None = None,
    ) -> "ErrorResponse":
        """Assemble a response, dropping detail items without a message."""
        items = [ErrorDetail.model_validate(d) for d in details or [] if d.get("msg")]
        return cls(
            error=error_type,
            message=message,
            upstream=upstream,
            details=items or None,
            request_id=request_id,
        )
