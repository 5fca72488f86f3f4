"""
Shared fixtures: a scripted fake model, an in-memory store and the service.
"""

import asyncio

import pytest

from snippet_review.repositories import InMemoryResponseStore
from snippet_review.services import ReviewService


class FakeModel:
    """GenerativeModel stand-in that records prompts.

    Returns scripted responses in order, then "response #N". Raises
    ``error`` on every call when set.
    """

    def __init__(self, responses=None, error=None, model_name="fake-model"):
        self.calls: list[str] = []
        self.error = error
        self._responses = list(responses or [])
        self._model_name = model_name

    @property
    def model_name(self) -> str:
        return self._model_name

    async def generate_content(self, prompt: str) -> str:
        self.calls.append(prompt)
        number = len(self.calls)
        # Yield so concurrent resolutions interleave
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        if self._responses:
            return self._responses.pop(0)
        return f"response #{number}"


class FakeClock:
    """Manually advanced clock for TTL and rate-limit tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def model():
    """Create a fake model with default responses."""
    return FakeModel()


@pytest.fixture
def store():
    """Create an unbounded in-memory store."""
    return InMemoryResponseStore()


@pytest.fixture
def service(model, store):
    """Create a review service over the fake model and store."""
    return ReviewService(model=model, store=store)


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()
