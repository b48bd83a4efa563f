"""
Pydantic models for the JSON request and response bodies.
Field names are the wire names.
"""

from datetime import datetime, timezone
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_serializer


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def isoformat_z(value: datetime) -> str:
    """ISO-8601 in UTC with milliseconds, e.g. 2026-10-19T08:15:02.417Z"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TimestampedResponse(BaseModel):
    timestamp: datetime

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        return isoformat_z(value)


class HealthStatus(TimestampedResponse):
    """Response for the health check"""

    status: str = "Application is healthy"


class ApplicationInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    features: Tuple[str, ...]
    version: str


class EchoRequest(BaseModel):
    """Body of POST /api/echo. Unknown keys are ignored."""

    message: Optional[str] = None


class EchoResponse(TimestampedResponse):
    received: str


class ErrorResponse(BaseModel):
    error: str


APPLICATION_INFO = ApplicationInfo(
    message="Secure Flask Application",
    features=("Flask Server", "Security Scans", "Docker Deployment"),
    version="1.0.0",
)
