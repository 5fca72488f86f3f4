"""Repository layer for data access.

This layer hides external dependencies (process memory, the Gemini API)
behind protocol-based interfaces. The repositories satisfy the protocols
through structural typing, not inheritance.
"""

from snippet_review.protocols import GenerativeModel, ResponseStore

from .gemini_model import GeminiGenerativeModel
from .memory_repository import InMemoryResponseStore

__all__ = [
    "GenerativeModel",
    "ResponseStore",
    "GeminiGenerativeModel",
    "InMemoryResponseStore",
]
