"""Exceptions raised by the generative model boundary and app setup."""


class GenerationError(Exception):
    """The generative model failed to produce a response."""


class ContentBlockedError(GenerationError):
    """The model refused the prompt or the response on safety grounds.

    Attributes:
        reason: The provider's block or finish reason (e.g. "SAFETY")
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Content blocked by model safety filters: {reason}")
        self.reason = reason


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""
