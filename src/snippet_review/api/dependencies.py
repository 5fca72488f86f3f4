"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - A pre-built ReviewService (tests, host apps) is used as-is
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from snippet_review.config import settings
from snippet_review.handlers import ReviewHandler
from snippet_review.logging_config import configure_logging
from snippet_review.repositories import GeminiGenerativeModel, InMemoryResponseStore
from snippet_review.services import ReviewService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> ReviewHandler:
    """Dependency injection for ReviewHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The ReviewHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "review_handler", None)
    if handler is None:
        raise RuntimeError("ReviewHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Gemini model and in-memory response store (unless a service was given)
    2. Service (business logic) - app.state.review_service
    3. Handler (HTTP endpoints) - app.state.review_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Raises:
        ConfigurationError: If GEMINI_API_KEY is missing and no service was given
    """
    configure_logging(settings.log_level)

    owns_service = getattr(app.state, "review_service", None) is None
    if owns_service:
        model = GeminiGenerativeModel.create()
        store = InMemoryResponseStore.create()
        app.state.review_service = ReviewService.create(model=model, store=store)

    service: ReviewService = app.state.review_service
    app.state.review_handler = ReviewHandler(review_service=service)

    stats = service.get_stats()["cache"]
    logger.info("Review service initialized: model=%s", stats["model"])
    logger.info(
        "Cache limits: max_entries=%s ttl=%s (0 = none)",
        stats.get("max_entries", 0),
        stats.get("ttl", 0),
    )

    yield

    # Cleanup - remove what this lifespan created
    del app.state.review_handler
    if owns_service:
        del app.state.review_service
    logger.info("Review service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[ReviewHandler, Depends(get_handler)]
