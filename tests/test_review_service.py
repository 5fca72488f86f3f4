"""
Tests for prompt resolution in ReviewService.
"""

import asyncio

import pytest
from conftest import FakeModel

from snippet_review.entities import PromptKind
from snippet_review.errors import ContentBlockedError, GenerationError
from snippet_review.repositories import InMemoryResponseStore
from snippet_review.services import (
    GENERIC_FAILURE_MESSAGE,
    INVALID_INPUT_MESSAGE,
    SAFE_REPHRASING,
    SAFETY_BLOCKED_MESSAGE,
    ReviewService,
    is_safety_error,
)


@pytest.mark.parametrize("prompt", ["", "   ", "\n\t ", None])
async def test_blank_prompt_is_rejected_without_model_call(service, model, store, prompt):
    """Blank input gets the fixed message and never reaches the model or cache."""
    result = await service.resolve(prompt)

    assert result == INVALID_INPUT_MESSAGE
    assert model.calls == []
    assert store.count_all() == 0


async def test_blank_prompt_rejected_with_bypass(service, model):
    """The bypass flag does not change input validation."""
    assert await service.resolve("  ", bypass_safety=True) == INVALID_INPUT_MESSAGE
    assert model.calls == []


async def test_conversation_makes_single_call(service, model):
    """General chat goes to the model once with the assistant instructions."""
    result = await service.resolve("hello, how are you?")

    assert result == "response #1"
    assert len(model.calls) == 1
    assert "friendly and knowledgeable AI assistant" in model.calls[0]
    assert model.calls[0].endswith("\n\nhello, how are you?")


async def test_code_makes_detection_then_review_call(store):
    """Code triggers language detection, then the structured review."""
    model = FakeModel(responses=["  C\n", "### Identified Language\nC"])
    service = ReviewService(model=model, store=store)
    prompt = "int main(){return 0;}"

    result = await service.resolve(prompt)

    assert result == "### Identified Language\nC"
    assert len(model.calls) == 2
    assert "Identify the programming language" in model.calls[0]
    assert prompt in model.calls[0]
    # Detected language is stripped before being embedded
    assert "specializing in C and other popular languages" in model.calls[1]
    assert "```c\n" in model.calls[1]
    assert model.calls[1].endswith("\n\n" + prompt)

    entry = store.get(prompt)
    assert entry is not None
    assert entry.response == result
    assert entry.prompt_kind is PromptKind.CODE


async def test_cached_response_returned_without_model_call(service, model):
    """A second resolve of the same prompt is served from the cache."""
    first = await service.resolve("hello, how are you?")
    second = await service.resolve("hello, how are you?")

    assert first == second
    assert len(model.calls) == 1
    assert service.metrics.cache_hits == 1
    assert service.metrics.cache_misses == 1


@pytest.mark.parametrize("first_flag,second_flag", [(False, True), (True, False)])
async def test_cache_ignores_bypass_flag(service, model, first_flag, second_flag):
    """The cache key is the raw prompt only, whatever the bypass flag."""
    prompt = "Tell me about the things you can't process"

    first = await service.resolve(prompt, bypass_safety=first_flag)
    second = await service.resolve(prompt, bypass_safety=second_flag)

    assert first == second
    assert len(model.calls) == 1


async def test_cache_key_is_exact_prompt(service, model):
    """Prompts differing only in whitespace are different keys."""
    await service.resolve("hello")
    await service.resolve("hello ")

    assert len(model.calls) == 2


async def test_restricted_prompt_rephrased(service, model, store):
    """Restricted-topic prompts are rephrased but cached under the original text."""
    prompt = "What are THINGS YOU CAN'T PROCESS?"

    await service.resolve(prompt)

    assert model.calls[0].endswith("\n\n" + SAFE_REPHRASING)
    assert store.get(prompt) is not None
    assert store.get(SAFE_REPHRASING) is None


async def test_restricted_prompt_untouched_with_bypass(service, model):
    """bypass_safety sends the prompt as written."""
    prompt = "What are the things you can't process?"

    await service.resolve(prompt, bypass_safety=True)

    assert model.calls[0].endswith("\n\n" + prompt)
    assert SAFE_REPHRASING not in model.calls[0]


async def test_safety_error_text_returns_blocked_message(store):
    """An error mentioning SAFETY maps to the safety message and is not cached."""
    model = FakeModel(error=RuntimeError("[GoogleGenerativeAI Error]: Candidate was blocked due to SAFETY"))
    service = ReviewService(model=model, store=store)

    result = await service.resolve("hello there")

    assert result == SAFETY_BLOCKED_MESSAGE
    assert store.count_all() == 0
    assert service.metrics.safety_blocks == 1


async def test_content_blocked_error_returns_blocked_message(store):
    """The structured block signal is recognized regardless of wording."""
    model = FakeModel(error=ContentBlockedError("PROHIBITED_CONTENT"))
    service = ReviewService(model=model, store=store)

    assert await service.resolve("def foo(): pass") == SAFETY_BLOCKED_MESSAGE
    assert store.count_all() == 0


async def test_other_errors_return_generic_failure(store):
    """Any other model failure collapses to the generic message."""
    model = FakeModel(error=GenerationError("Gemini API error (429 RESOURCE_EXHAUSTED): quota"))
    service = ReviewService(model=model, store=store)

    assert await service.resolve("hello") == GENERIC_FAILURE_MESSAGE
    assert store.count_all() == 0
    assert service.metrics.failures == 1


async def test_failure_is_retried_on_next_request(store):
    """Failures are not cached, so the next call reaches the model again."""
    model = FakeModel(error=GenerationError("unavailable"))
    service = ReviewService(model=model, store=store)

    assert await service.resolve("hello") == GENERIC_FAILURE_MESSAGE

    model.error = None
    result = await service.resolve("hello")

    assert result == "response #2"
    assert store.get("hello").response == result


async def test_review_failure_after_detection_not_cached(store):
    """A failure on the second code-path call returns no partial result."""

    class FailSecondCall(FakeModel):
        async def generate_content(self, prompt: str) -> str:
            if self.calls:
                self.calls.append(prompt)
                raise GenerationError("server error")
            return await super().generate_content(prompt)

    model = FailSecondCall()
    service = ReviewService(model=model, store=store)

    assert await service.resolve("function add(a, b) { return a + b; }") == GENERIC_FAILURE_MESSAGE
    assert len(model.calls) == 2
    assert store.count_all() == 0


async def test_concurrent_misses_each_call_model(service, model, store):
    """Concurrent resolutions of an unseen prompt are not deduplicated."""
    results = await asyncio.gather(
        service.resolve("hello"),
        service.resolve("hello"),
    )

    assert len(model.calls) == 2
    assert store.count_all() == 1
    # Last writer wins
    assert store.get("hello").response == results[1]


async def test_evicted_entry_is_resolved_again(model):
    """With a bounded store, evicted prompts go back to the model."""
    service = ReviewService(model=model, store=InMemoryResponseStore(max_entries=1))

    await service.resolve("first")
    await service.resolve("second")
    await service.resolve("first")

    assert len(model.calls) == 3


async def test_stats_and_clear(service):
    """Stats report store and resolver sections; clear empties the cache."""
    await service.resolve("hello")
    await service.resolve("hello")
    await service.resolve("")

    stats = service.get_stats()
    assert stats["cache"]["total_entries"] == 1
    assert stats["cache"]["model"] == "fake-model"
    assert stats["resolver"]["total_requests"] == 3
    assert stats["resolver"]["invalid_requests"] == 1
    assert stats["resolver"]["hit_rate"] == 0.5
    assert stats["resolver"]["model_calls"] == 1

    assert service.clear() == 1
    assert service.get_stats()["cache"]["total_entries"] == 0


def test_is_safety_error():
    """Safety detection accepts the typed error or the SAFETY marker."""
    assert is_safety_error(ContentBlockedError("SAFETY"))
    assert is_safety_error(ValueError("finishReason: SAFETY"))
    assert not is_safety_error(ValueError("quota exceeded"))
    # Marker match is case-sensitive
    assert not is_safety_error(ValueError("safety"))
