"""Generative model protocol.

Defines the boundary to the external large-language-model API. The
resolver only needs "prompt text in, response text out".
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class GenerativeModel(Protocol):
    """Protocol for text generation services."""

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model.

        Returns:
            Model name (e.g., "gemini-2.0-flash")
        """
        ...

    async def generate_content(self, prompt: str) -> str:
        """Generate a text response for a prompt.

        Args:
            prompt: The full prompt text, instructions included

        Returns:
            The response text

        Raises:
            ContentBlockedError: If the provider blocked the prompt or response
            GenerationError: For any other provider failure
        """
        ...
