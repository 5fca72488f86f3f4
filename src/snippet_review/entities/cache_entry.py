"""Cache entry domain entity."""

from dataclasses import dataclass

from .prompt_kind import PromptKind


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached prompt-response pair.

    Attributes:
        prompt: The exact prompt the caller submitted (the cache key)
        response: The raw model response text
        stored_at: Clock reading when the entry was stored (seconds)
        prompt_kind: How the prompt was classified when it was resolved
    """

    prompt: str
    response: str
    stored_at: float
    prompt_kind: PromptKind = PromptKind.CONVERSATION
