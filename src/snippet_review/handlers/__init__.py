"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Cache / Gemini)
"""

from .review_handler import ReviewHandler

__all__ = [
    "ReviewHandler",
]
