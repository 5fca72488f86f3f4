"""Gemini-based generative model.

Uses the google-genai SDK's async client to generate text. Requires a
Gemini API key (GEMINI_API_KEY).

Key features:
- One client per provider instance, injected or built from settings
- Safety blocks surface as ContentBlockedError, read from the structured
  prompt feedback / finish reason rather than from error text
- Every other SDK or transport failure surfaces as GenerationError
"""

import logging
import time

import httpx
from google import genai
from google.genai import errors

from snippet_review.config import settings
from snippet_review.errors import ConfigurationError, ContentBlockedError, GenerationError

logger = logging.getLogger(__name__)

# Candidate finish reasons that mean the response was withheld by a filter
BLOCKING_FINISH_REASONS = frozenset(
    {"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII", "IMAGE_SAFETY"}
)


def _reason_name(reason: object) -> str:
    return getattr(reason, "name", None) or str(reason)


class GeminiGenerativeModel:
    """Gemini implementation of the GenerativeModel protocol.

    This class satisfies the GenerativeModel protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        model = GeminiGenerativeModel.create()
        text = await model.generate_content("Say hello")
        ```
    """

    def __init__(
        self,
        client: genai.Client,
        model_name: str | None = None,
    ) -> None:
        """Initialize the Gemini model.

        Args:
            client: A configured google-genai client.
            model_name: Gemini model id. Defaults to settings.gemini_model.
        """
        self._client = client
        self._model_name = model_name or settings.gemini_model

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        model_name: str | None = None,
    ) -> "GeminiGenerativeModel":
        """Factory method building the SDK client from settings.

        Args:
            api_key: Gemini API key. If None, uses settings.
            model_name: Model id. If None, uses settings.

        Returns:
            Configured GeminiGenerativeModel

        Raises:
            ConfigurationError: If no API key is available
        """
        api_key = api_key or settings.gemini_api_key
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set")

        return cls(client=genai.Client(api_key=api_key), model_name=model_name)

    @property
    def model_name(self) -> str:
        """Get the model name/identifier."""
        return self._model_name

    async def generate_content(self, prompt: str) -> str:
        """Generate a text response for a prompt.

        Args:
            prompt: The full prompt text

        Returns:
            The response text

        Raises:
            ContentBlockedError: If the prompt or every candidate was blocked
            GenerationError: If the API call failed or returned no text
        """
        start_time = time.perf_counter()

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model_name,
                contents=prompt,
            )
        except errors.APIError as e:
            raise GenerationError(f"Gemini API error ({e.code} {e.status}): {e.message}") from e
        except httpx.HTTPError as e:
            raise GenerationError(f"Gemini transport error: {e}") from e
        except Exception as e:
            raise GenerationError(f"Gemini request failed: {type(e).__name__}: {e}") from e

        latency_ms = (time.perf_counter() - start_time) * 1000

        reason = self._block_reason(response)
        if reason is not None:
            logger.warning("Gemini blocked content: model=%s reason=%s", self._model_name, reason)
            raise ContentBlockedError(reason)

        text = response.text
        if not text:
            raise GenerationError("Gemini returned an empty response")

        logger.debug(
            "Gemini response: model=%s prompt_chars=%d response_chars=%d latency_ms=%.1f",
            self._model_name,
            len(prompt),
            len(text),
            latency_ms,
        )
        return text

    @staticmethod
    def _block_reason(response: object) -> str | None:
        """Extract a safety block reason from a generate_content response.

        Args:
            response: The SDK response object

        Returns:
            The block reason name, or None if the response was not blocked
        """
        feedback = getattr(response, "prompt_feedback", None)
        if feedback is not None and getattr(feedback, "block_reason", None):
            return _reason_name(feedback.block_reason)

        candidates = getattr(response, "candidates", None) or []
        reasons = [_reason_name(c.finish_reason) for c in candidates if c.finish_reason is not None]
        # Only blocked when no candidate made it through
        if candidates and len(reasons) == len(candidates) and all(
            r in BLOCKING_FINISH_REASONS for r in reasons
        ):
            return reasons[0]

        return None
