"""
Institute Portal Backend: Shared Response Schemas
==================================================

What:  Response models shared by every router: the error envelope, the
       health payload and the plain message envelope returned by deletes.

`LocalizedField` is the type of every translatable field in a response.
Public routes always send a string (or null); admin routes without `?lang=`
send the stored {"en": ..., "ar": ...} mapping so editors can see and edit
every translation at once.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field

LocalizedField = Optional[Union[str, Dict[str, Any]]]


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "conflict",
            "message": "A service center with this slug already exists",
            "details": {"slug": "materials-lab"},
            "request_id": "3f9a1c2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description, localized")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for container and load balancer probes."""
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class MessageResponse(BaseModel):
    message: str = Field(description="Localized confirmation message")
