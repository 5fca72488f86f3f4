"""Protocol interfaces for swappable implementations.

Protocols enable:
- Swapping the cache backend or the model provider without touching services
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from snippet_review.protocols import GenerativeModel, ResponseStore

    store: ResponseStore = InMemoryResponseStore()
    model: GenerativeModel = GeminiGenerativeModel.create()
    ```
"""

from .generative_model import GenerativeModel
from .response_store import ResponseStore

__all__ = [
    "GenerativeModel",
    "ResponseStore",
]
