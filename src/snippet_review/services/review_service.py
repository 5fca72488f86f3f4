"""Review service for core business logic.

This service resolves a prompt to response text by coordinating the
response store (cache) and the generative model (Gemini by default).
"""

import logging
import time

from snippet_review.entities import PromptKind
from snippet_review.errors import ContentBlockedError
from snippet_review.models import ResolverMetrics
from snippet_review.protocols import GenerativeModel, ResponseStore

from .prompts import (
    GENERIC_FAILURE_MESSAGE,
    INVALID_INPUT_MESSAGE,
    SAFETY_BLOCKED_MESSAGE,
    build_conversation_prompt,
    build_language_detection_prompt,
    build_review_prompt,
    classify_prompt,
    is_blank,
    preprocess_prompt,
)

logger = logging.getLogger(__name__)

# Substring some providers put in the error text of a safety rejection
SAFETY_ERROR_MARKER = "SAFETY"


def is_safety_error(error: Exception) -> bool:
    """Check whether a model failure was a safety rejection.

    Args:
        error: The exception raised by the model

    Returns:
        True for ContentBlockedError or any error whose message mentions SAFETY
    """
    return isinstance(error, ContentBlockedError) or SAFETY_ERROR_MARKER in str(error)


class ReviewService:
    """Prompt resolution service.

    This service depends on PROTOCOLS, not concrete implementations:
    - ResponseStore: the prompt -> response cache
    - GenerativeModel: Gemini, or a fake in tests

    Failures never raise: every outcome is a string, and the fixed
    error strings travel on the same channel as model output.

    Example:
        ```python
        from snippet_review.repositories import GeminiGenerativeModel, InMemoryResponseStore
        from snippet_review.services import ReviewService

        service = ReviewService.create(
            model=GeminiGenerativeModel.create(),
            store=InMemoryResponseStore.create(),
        )
        text = await service.resolve("def add(a, b): return a + b")
        ```
    """

    def __init__(
        self,
        model: GenerativeModel,
        store: ResponseStore,
    ) -> None:
        """Initialize the review service.

        Args:
            model: Text generation backend (required).
            store: Response cache (required).
        """
        self._model = model
        self._store = store
        self._metrics = ResolverMetrics()

    @classmethod
    def create(
        cls,
        model: GenerativeModel,
        store: ResponseStore,
    ) -> "ReviewService":
        """Factory method mirroring the repositories' create().

        Args:
            model: Text generation backend (required).
            store: Response cache (required).

        Returns:
            Configured ReviewService instance
        """
        return cls(model=model, store=store)

    async def resolve(self, prompt: str | None, bypass_safety: bool = False) -> str:
        """Resolve a prompt to response text.

        Business logic:
        1. Reject blank input without touching the cache or the model
        2. Return the cached response for the exact prompt, if any
        3. Rephrase restricted-topic prompts unless bypass_safety is set
        4. Classify as code or conversation
        5. Call the model (two calls for code, one for conversation)
        6. Cache the response under the original prompt

        The cache key ignores bypass_safety, so a response cached with one
        flag value is returned for the other as well.

        Args:
            prompt: The user's text or code snippet
            bypass_safety: Skip the rephrasing step

        Returns:
            The model's response, or one of the fixed error messages
        """
        self._metrics.total_requests += 1

        if is_blank(prompt):
            self._metrics.invalid_requests += 1
            return INVALID_INPUT_MESSAGE

        cached = self._store.get(prompt)
        if cached is not None:
            self._metrics.cache_hits += 1
            logger.info("Returning cached response for: %.80r", prompt)
            return cached.response
        self._metrics.cache_misses += 1

        try:
            processed = prompt if bypass_safety else preprocess_prompt(prompt)
            if processed != prompt:
                logger.info("Rephrased restricted-topic prompt")

            kind = classify_prompt(processed)
            logger.debug("Classified prompt as %s", kind.value)

            if kind is PromptKind.CODE:
                self._metrics.code_requests += 1
                response = await self._review_code(processed)
            else:
                self._metrics.conversation_requests += 1
                response = await self._converse(processed)

        except Exception as e:
            logger.error("Model request failed: %s", e, exc_info=True)
            if is_safety_error(e):
                self._metrics.safety_blocks += 1
                return SAFETY_BLOCKED_MESSAGE
            self._metrics.failures += 1
            return GENERIC_FAILURE_MESSAGE

        self._store.put(prompt, response, kind)
        logger.info("Cached response for: %.80r", prompt)

        return response

    async def _review_code(self, code: str) -> str:
        """Detect the snippet's language, then request the structured review."""
        detected = await self._generate(build_language_detection_prompt(code))
        language = detected.strip()
        logger.debug("Detected language: %s", language)

        return await self._generate(build_review_prompt(language, code))

    async def _converse(self, text: str) -> str:
        return await self._generate(build_conversation_prompt(text))

    async def _generate(self, prompt: str) -> str:
        start_time = time.perf_counter()
        try:
            return await self._model.generate_content(prompt)
        finally:
            self._metrics.record_model_call((time.perf_counter() - start_time) * 1000)

    def clear(self) -> int:
        """Clear all cached responses.

        Returns:
            Number of entries deleted
        """
        return self._store.clear_all()

    def get_stats(self) -> dict:
        """Get cache and resolver statistics.

        Returns:
            Dictionary with "cache" and "resolver" sections
        """
        stats = self._store.get_stats()
        stats["model"] = self._model.model_name
        return {
            "cache": stats,
            "resolver": self._metrics.to_dict(),
        }

    def reset_metrics(self) -> None:
        """Reset the resolver counters."""
        self._metrics = ResolverMetrics()

    def is_healthy(self) -> bool:
        """Check if the response store is usable."""
        return self._store.health_check()

    @property
    def metrics(self) -> ResolverMetrics:
        """Get the resolver counters."""
        return self._metrics

    @property
    def store(self) -> ResponseStore:
        """Get the underlying response store (for testing)."""
        return self._store

    @property
    def model(self) -> GenerativeModel:
        """Get the underlying generative model (for testing)."""
        return self._model
