"""Pydantic models for API requests and responses.

Field names on the wire match what the dashboard frontend reads
(``activeUsers``, ``responseTime``, ``cacheHitRate``).
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# =============================================================================
# User Models
# =============================================================================


class UserCreate(BaseModel):
    """Request model for creating a user."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name",
        json_schema_extra={"example": "Ada Lovelace"},
    )
    email: EmailStr = Field(
        ...,
        description="Contact email",
        json_schema_extra={"example": "ada@example.com"},
    )


class UserResponse(BaseModel):
    """Response model for a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique user identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Contact email")


# =============================================================================
# Metrics Models
# =============================================================================


class MetricsResponse(BaseModel):
    """Dashboard metrics. Response time and cache hit rate are synthetic."""

    model_config = ConfigDict(populate_by_name=True)

    active_users: int = Field(..., alias="activeUsers", ge=0, description="Stored user count")
    response_time: int = Field(
        ..., alias="responseTime", ge=50, lt=150, description="Response time in ms"
    )
    cache_hit_rate: int = Field(
        ..., alias="cacheHitRate", ge=60, lt=100, description="Cache hit rate in percent"
    )


# =============================================================================
# Error Models
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable message")
    detail: Optional[str] = Field(None, description="Debug detail")
    path: Optional[str] = Field(None, description="Request path")
    timestamp: datetime = Field(..., description="When the error occurred")


class ValidationErrorDetail(BaseModel):
    """One invalid request field."""

    field: str
    message: str
    value: Optional[Any] = None


class ValidationErrorResponse(BaseModel):
    """Response for request validation failures."""

    error: str = "validation_error"
    message: str = "Request validation failed"
    errors: list[ValidationErrorDetail]
    timestamp: datetime
