"""Snippet Review - code review and chat backed by a generative model.

This package provides a layered architecture around one operation,
resolving a prompt (code snippet or chat message) to response text:

Layers:
    - protocols: Interface contracts (GenerativeModel, ResponseStore)
    - repositories: Gemini client adapter and in-memory response cache
    - services: Prompt resolution (validation, cache, classification, model calls)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from snippet_review.repositories import GeminiGenerativeModel, InMemoryResponseStore
    from snippet_review.services import ReviewService

    service = ReviewService.create(
        model=GeminiGenerativeModel.create(),
        store=InMemoryResponseStore.create(),
    )
    text = await service.resolve("int main(){return 0;}")
    ```

For HTTP API:
    ```python
    from snippet_review.api.app import app
    ```
"""

from snippet_review.config import get_settings, settings
from snippet_review.dto import ReviewRequest
from snippet_review.entities import CacheEntryEntity, PromptKind
from snippet_review.errors import ConfigurationError, ContentBlockedError, GenerationError
from snippet_review.handlers import ReviewHandler
from snippet_review.protocols import GenerativeModel, ResponseStore
from snippet_review.repositories import GeminiGenerativeModel, InMemoryResponseStore
from snippet_review.services import ReviewService

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "GenerativeModel",
    "ResponseStore",
    # Services (business logic)
    "ReviewService",
    # Handlers (HTTP)
    "ReviewHandler",
    # Repositories
    "GeminiGenerativeModel",
    "InMemoryResponseStore",
    # Entities (domain models)
    "CacheEntryEntity",
    "PromptKind",
    # Errors
    "GenerationError",
    "ContentBlockedError",
    "ConfigurationError",
    # DTOs (API contracts)
    "ReviewRequest",
]
