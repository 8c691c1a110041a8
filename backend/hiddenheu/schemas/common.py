"""
HiddenHeu Backend — Common Response Schemas
=============================================

Error and health payloads shared by every router. These stay snake_case
like the rest of the error handling in main.py.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field

from hiddenheu.schemas.base import APIModel


class SuccessResponse(APIModel):
    """Body of logout and favorite removal."""

    success: bool = True


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "Username already exists",
            "details": {"field": "username"},
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""

    status: str = Field(description="Overall service status: healthy or degraded")
    version: str = Field(description="Application version")
    storage: Dict[str, int] = Field(description="Row count per in-memory collection")
    translator: str = Field(description="Translation status: available, not_configured, circuit_open")
    active_sessions: int = Field(description="Number of live session tokens")
    uptime_seconds: float = Field(description="Seconds since service started")
