"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable with fake models and stores.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Cache / Gemini)

Usage:
    ```python
    from snippet_review.services import ReviewService

    service = ReviewService.create(model=model, store=store)
    text = await service.resolve("hello, how are you?")
    ```
"""

from .prompts import (
    GENERIC_FAILURE_MESSAGE,
    INVALID_INPUT_MESSAGE,
    SAFE_REPHRASING,
    SAFETY_BLOCKED_MESSAGE,
    classify_prompt,
    looks_like_code,
    preprocess_prompt,
)
from .review_service import ReviewService, is_safety_error

__all__ = [
    "ReviewService",
    "is_safety_error",
    "classify_prompt",
    "looks_like_code",
    "preprocess_prompt",
    "INVALID_INPUT_MESSAGE",
    "SAFETY_BLOCKED_MESSAGE",
    "GENERIC_FAILURE_MESSAGE",
    "SAFE_REPHRASING",
]
