"""In-process implementation of ResponseStore.

Entries live in a dict for the lifetime of the process and are lost on
restart. With the default settings the store is unbounded and entries never
expire. Setting ``max_entries`` turns it into an LRU cache, and ``ttl``
expires entries against the injected clock.
"""

import logging
import time
from collections import OrderedDict
from collections.abc import Callable

from snippet_review.config import settings
from snippet_review.entities import CacheEntryEntity, PromptKind

logger = logging.getLogger(__name__)


class InMemoryResponseStore:
    """Exact-match prompt cache backed by an ordered dict.

    This class satisfies the ResponseStore protocol through structural
    typing - no explicit inheritance needed.

    No locking is done: the asyncio event loop runs one coroutine at a time
    and none of these methods await.

    Example:
        ```python
        store = InMemoryResponseStore(max_entries=2)
        store.put("a", "A")
        store.get("a").response  # "A"
        ```
    """

    def __init__(
        self,
        max_entries: int = 0,
        ttl: float = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the store.

        Args:
            max_entries: Maximum number of entries, 0 for unbounded.
            ttl: Seconds an entry stays valid, 0 for forever.
            clock: Returns the current time in seconds.
        """
        if max_entries < 0:
            raise ValueError("max_entries must be >= 0")
        if ttl < 0:
            raise ValueError("ttl must be >= 0")

        self._entries: OrderedDict[str, CacheEntryEntity] = OrderedDict()
        self._max_entries = max_entries
        self._ttl = ttl
        self._clock = clock
        self._evictions = 0
        self._expirations = 0

    @classmethod
    def create(
        cls,
        max_entries: int | None = None,
        ttl: float | None = None,
    ) -> "InMemoryResponseStore":
        """Factory method to create the store with limits from settings.

        Args:
            max_entries: Entry bound. If None, uses settings.
            ttl: Entry TTL in seconds. If None, uses settings.

        Returns:
            Configured InMemoryResponseStore
        """
        return cls(
            max_entries=settings.cache_max_entries if max_entries is None else max_entries,
            ttl=settings.cache_ttl if ttl is None else ttl,
        )

    def _is_expired(self, entry: CacheEntryEntity) -> bool:
        return bool(self._ttl) and self._clock() - entry.stored_at >= self._ttl

    def get(self, prompt: str) -> CacheEntryEntity | None:
        """Look up the entry stored under the exact prompt.

        A hit refreshes the entry's LRU position. Expired entries are
        dropped on access.

        Args:
            prompt: The prompt to match

        Returns:
            The entry, or None if absent or expired
        """
        entry = self._entries.get(prompt)
        if entry is None:
            return None

        if self._is_expired(entry):
            del self._entries[prompt]
            self._expirations += 1
            return None

        self._entries.move_to_end(prompt)
        return entry

    def put(
        self,
        prompt: str,
        response: str,
        prompt_kind: PromptKind = PromptKind.CONVERSATION,
    ) -> CacheEntryEntity:
        """Store a response, evicting the least recently used entries if full.

        Args:
            prompt: The cache key (replaces any entry with the same prompt)
            response: The response text
            prompt_kind: How the prompt was classified

        Returns:
            The stored entry
        """
        entry = CacheEntryEntity(
            prompt=prompt,
            response=response,
            stored_at=self._clock(),
            prompt_kind=prompt_kind,
        )
        self._entries[prompt] = entry
        self._entries.move_to_end(prompt)

        if self._max_entries:
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("Evicted cache entry: %.60r", evicted)

        return entry

    def delete(self, prompt: str) -> bool:
        """Delete the entry stored under the exact prompt.

        Args:
            prompt: The prompt to match

        Returns:
            True if deleted, False otherwise
        """
        return self._entries.pop(prompt, None) is not None

    def clear_all(self) -> int:
        """Clear all entries from the store.

        Returns:
            Number of entries deleted
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def purge_expired(self) -> int:
        """Drop every expired entry.

        Returns:
            Number of entries dropped
        """
        if not self._ttl:
            return 0

        expired = [prompt for prompt, entry in self._entries.items() if self._is_expired(entry)]
        for prompt in expired:
            del self._entries[prompt]
        self._expirations += len(expired)
        return len(expired)

    def count_all(self) -> int:
        """Count live entries in the store.

        Returns:
            Total number of cached entries
        """
        self.purge_expired()
        return len(self._entries)

    def health_check(self) -> bool:
        """Process memory is always reachable."""
        return True

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats
        """
        return {
            "backend": "memory",
            "total_entries": self.count_all(),
            "max_entries": self._max_entries,
            "ttl": self._ttl,
            "evictions": self._evictions,
            "expirations": self._expirations,
        }
