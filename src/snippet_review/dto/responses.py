"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Response DTO for every non-2xx JSON error."""

    error: str = Field(..., description="Short error description")
    message: str | None = Field(None, description="Details, only for server errors")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: always 'healthy' while serving")


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    cache: dict[str, Any] = Field(..., description="Response store statistics and model name")
    resolver: dict[str, Any] = Field(..., description="Request, cache-hit and model-call counters")


class CacheClearResponse(BaseModel):
    """Response DTO for clearing the cache."""

    success: bool = Field(..., description="Whether the operation succeeded")
    deleted_count: int = Field(..., description="Number of entries removed", ge=0)
    message: str = Field(..., description="Human-readable status message")
