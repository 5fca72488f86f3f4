"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
Internal domain logic should use entities from the entities package.
"""

from .requests import ReviewRequest
from .responses import (
    CacheClearResponse,
    CacheStatsResponse,
    ErrorResponse,
    HealthCheckResponse,
)

__all__ = [
    "ReviewRequest",
    "CacheClearResponse",
    "CacheStatsResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
