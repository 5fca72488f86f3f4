"""Response storage protocol.

Defines the interface for the exact-match prompt -> response cache.
"""

from typing import Protocol, runtime_checkable

from snippet_review.entities import CacheEntryEntity, PromptKind


@runtime_checkable
class ResponseStore(Protocol):
    """Protocol for response cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.
    """

    def get(self, prompt: str) -> CacheEntryEntity | None:
        """Look up the entry stored under the exact prompt.

        Args:
            prompt: The prompt to match (no normalization)

        Returns:
            The entry, or None if absent or expired
        """
        ...

    def put(
        self,
        prompt: str,
        response: str,
        prompt_kind: PromptKind = PromptKind.CONVERSATION,
    ) -> CacheEntryEntity:
        """Store a response under the exact prompt, replacing any previous one.

        Args:
            prompt: The cache key
            response: The response text
            prompt_kind: How the prompt was classified

        Returns:
            The stored entry, stamped with the store's clock
        """
        ...

    def delete(self, prompt: str) -> bool:
        """Delete the entry stored under the exact prompt.

        Args:
            prompt: The prompt to match

        Returns:
            True if an entry was deleted, False otherwise
        """
        ...

    def clear_all(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries deleted
        """
        ...

    def count_all(self) -> int:
        """Count live entries.

        Returns:
            Total number of cached entries
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is usable.

        Returns:
            True if healthy, False otherwise
        """
        ...

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
