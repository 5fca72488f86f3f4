"""
Tests for the Gemini adapter, using a fake google-genai client.
"""

from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors

from snippet_review.errors import ConfigurationError, ContentBlockedError, GenerationError
from snippet_review.protocols import GenerativeModel
from snippet_review.repositories import GeminiGenerativeModel


class FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests: list[dict] = []

    async def generate_content(self, *, model, contents):
        self.requests.append({"model": model, "contents": contents})
        if self.error is not None:
            raise self.error
        return self.response


def make_client(response=None, error=None):
    """Build an object shaped like genai.Client for the async API."""
    models = FakeModels(response=response, error=error)
    return SimpleNamespace(aio=SimpleNamespace(models=models)), models


def make_response(text="hello", finish_reasons=("STOP",), block_reason=None):
    return SimpleNamespace(
        text=text,
        prompt_feedback=SimpleNamespace(block_reason=block_reason) if block_reason else None,
        candidates=[SimpleNamespace(finish_reason=r) for r in finish_reasons],
    )


async def test_returns_text_and_passes_model_name():
    """The prompt is sent as contents to the configured model."""
    client, models = make_client(response=make_response(text="Python"))
    model = GeminiGenerativeModel(client=client, model_name="gemini-test")

    assert await model.generate_content("what language?") == "Python"
    assert models.requests == [{"model": "gemini-test", "contents": "what language?"}]
    assert model.model_name == "gemini-test"


def test_satisfies_protocol():
    """The adapter satisfies the GenerativeModel protocol."""
    client, _ = make_client()
    assert isinstance(GeminiGenerativeModel(client=client), GenerativeModel)


async def test_blocked_prompt_raises_content_blocked():
    """A prompt_feedback block reason raises ContentBlockedError."""
    client, _ = make_client(response=make_response(text=None, finish_reasons=(), block_reason="SAFETY"))
    model = GeminiGenerativeModel(client=client)

    with pytest.raises(ContentBlockedError) as exc_info:
        await model.generate_content("something nasty")

    assert exc_info.value.reason == "SAFETY"


async def test_safety_finish_reason_raises_content_blocked():
    """All candidates stopped by a filter raises ContentBlockedError."""
    client, _ = make_client(response=make_response(text=None, finish_reasons=("SAFETY",)))
    model = GeminiGenerativeModel(client=client)

    with pytest.raises(ContentBlockedError):
        await model.generate_content("something nasty")


async def test_mixed_finish_reasons_are_not_blocked():
    """One usable candidate is enough."""
    client, _ = make_client(response=make_response(text="ok", finish_reasons=("SAFETY", "STOP")))
    model = GeminiGenerativeModel(client=client)

    assert await model.generate_content("hi") == "ok"


async def test_empty_text_raises_generation_error():
    """A response without text is a failure."""
    client, _ = make_client(response=make_response(text=""))
    model = GeminiGenerativeModel(client=client)

    with pytest.raises(GenerationError):
        await model.generate_content("hi")


async def test_api_error_wrapped():
    """SDK API errors are wrapped, keeping status and message."""
    error = errors.ClientError(
        429,
        {"error": {"code": 429, "message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}},
    )
    client, _ = make_client(error=error)
    model = GeminiGenerativeModel(client=client)

    with pytest.raises(GenerationError) as exc_info:
        await model.generate_content("hi")

    assert not isinstance(exc_info.value, ContentBlockedError)
    assert "Quota exceeded" in str(exc_info.value)
    assert exc_info.value.__cause__ is error


async def test_transport_error_wrapped():
    """httpx transport failures are wrapped as GenerationError."""
    client, _ = make_client(error=httpx.ConnectError("connection refused"))
    model = GeminiGenerativeModel(client=client)

    with pytest.raises(GenerationError, match="transport"):
        await model.generate_content("hi")


def test_create_requires_api_key(monkeypatch):
    """create() refuses to build a client without a key."""
    monkeypatch.setattr(
        "snippet_review.repositories.gemini_model.settings",
        SimpleNamespace(gemini_api_key=None, gemini_model="m"),
    )

    with pytest.raises(ConfigurationError):
        GeminiGenerativeModel.create()


def test_create_with_key():
    """create() builds a real SDK client from an explicit key."""
    model = GeminiGenerativeModel.create(api_key="test-key", model_name="gemini-test")

    assert model.model_name == "gemini-test"


async def test_unexpected_error_wrapped():
    """Any other SDK failure is wrapped as GenerationError."""
    original = ValueError("malformed candidate")
    client, _ = make_client(error=original)
    model = GeminiGenerativeModel(client=client)

    with pytest.raises(GenerationError, match="ValueError: malformed candidate") as exc_info:
        await model.generate_content("hi")

    assert not isinstance(exc_info.value, ContentBlockedError)
    assert exc_info.value.__cause__ is original
