"""Provider client tests - SDK error classification and response mapping.

Invariants:
    - Each vendor's SDK exceptions map to the right FailureKind
    - Responses map to Completion; missing content becomes ""
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import anthropic
import httpx
import openai
import pytest
from mistralai import models as mistral_models

from app.infrastructure.anthropic_client import AnthropicClient
from app.infrastructure.llm_client import FailureKind
from app.infrastructure.mistral_client import MistralClient
from app.infrastructure.openai_client import OpenAIClient

_REQUEST = httpx.Request("POST", "https://api.example.test/v1/chat")


def _response(status, headers=None):
    return httpx.Response(status, request=_REQUEST, headers=headers or {})


async def _complete(client):
    return await client.complete(
        system="sys", user="usr", temperature=0.5, max_tokens=64,
    )


# --- OpenAI -------------------------------------------------------------------

@pytest.fixture
def openai_client():
    return OpenAIClient(api_key="sk-test", model="gpt-test", max_retries=0)


@pytest.mark.parametrize("error, kind", [
    (openai.RateLimitError("slow", response=_response(429), body=None), FailureKind.RATE_LIMIT),
    (openai.APITimeoutError(request=_REQUEST), FailureKind.TIMEOUT),
    (openai.APIConnectionError(request=_REQUEST), FailureKind.TRANSIENT),
    (openai.InternalServerError("boom", response=_response(500), body=None), FailureKind.TRANSIENT),
    (openai.BadRequestError("bad", response=_response(400), body=None), FailureKind.CLIENT),
    (openai.AuthenticationError("key", response=_response(401), body=None), FailureKind.CLIENT),
    (ValueError("other"), FailureKind.UNKNOWN),
])
def test_openai_classifies_errors(openai_client, error, kind):
    assert openai_client._classify_error(error) is kind


async def test_openai_maps_response(openai_client):
    response = SimpleNamespace(
        model="gpt-test-0125",
        choices=[SimpleNamespace(message=SimpleNamespace(content="Enhanced!"))],
        usage=SimpleNamespace(prompt_tokens=12, completion_tokens=34),
    )
    openai_client.client.chat.completions.create = AsyncMock(return_value=response)

    completion = await _complete(openai_client)

    assert completion.text == "Enhanced!"
    assert completion.model == "gpt-test-0125"
    assert (completion.input_tokens, completion.output_tokens) == (12, 34)
    kwargs = openai_client.client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-test"
    assert kwargs["messages"][0] == {"role": "system", "content": "sys"}
    assert kwargs["messages"][1] == {"role": "user", "content": "usr"}
    assert kwargs["temperature"] == 0.5
    assert kwargs["max_tokens"] == 64


async def test_openai_empty_choices_yield_empty_text(openai_client):
    response = SimpleNamespace(model=None, choices=[], usage=None)
    openai_client.client.chat.completions.create = AsyncMock(return_value=response)
    completion = await _complete(openai_client)
    assert completion.text == ""
    assert completion.model == "gpt-test"


# --- Mistral ------------------------------------------------------------------

@pytest.fixture
def mistral_client():
    return MistralClient(api_key="mk-test", model="mistral-test", max_retries=0)


class _SDKError(mistral_models.SDKError):
    """SDKError with only a status code; constructor differs across SDK releases."""

    def __init__(self, status):
        Exception.__init__(self, "API error occurred")
        object.__setattr__(self, "status_code", status)


def _sdk_error(status):
    return _SDKError(status)


@pytest.mark.parametrize("error, kind", [
    (httpx.ReadTimeout("slow", request=_REQUEST), FailureKind.TIMEOUT),
    (httpx.ConnectError("down", request=_REQUEST), FailureKind.TRANSIENT),
    (_sdk_error(429), FailureKind.RATE_LIMIT),
    (_sdk_error(503), FailureKind.TRANSIENT),
    (_sdk_error(401), FailureKind.CLIENT),
    (ValueError("other"), FailureKind.UNKNOWN),
])
def test_mistral_classifies_errors(mistral_client, error, kind):
    assert mistral_client._classify_error(error) is kind


async def test_mistral_maps_chunked_content(mistral_client):
    response = SimpleNamespace(
        model="mistral-test",
        choices=[SimpleNamespace(message=SimpleNamespace(content=[
            SimpleNamespace(text="Part one, "), SimpleNamespace(text="part two"),
        ]))],
        usage=SimpleNamespace(prompt_tokens=5, completion_tokens=6),
    )
    mistral_client.client.chat.complete_async = AsyncMock(return_value=response)

    completion = await _complete(mistral_client)

    assert completion.text == "Part one, part two"
    kwargs = mistral_client.client.chat.complete_async.call_args.kwargs
    assert kwargs["model"] == "mistral-test"
    assert kwargs["max_tokens"] == 64


async def test_mistral_none_content_yields_empty_text(mistral_client):
    response = SimpleNamespace(
        model=None,
        choices=[SimpleNamespace(message=SimpleNamespace(content=None))],
        usage=None,
    )
    mistral_client.client.chat.complete_async = AsyncMock(return_value=response)
    assert (await _complete(mistral_client)).text == ""


# --- Anthropic ----------------------------------------------------------------

@pytest.fixture
def anthropic_client():
    return AnthropicClient(api_key="sk-ant-test", model="claude-test", max_retries=0)


@pytest.mark.parametrize("error, kind", [
    (anthropic.RateLimitError("slow", response=_response(429), body=None), FailureKind.RATE_LIMIT),
    (anthropic.APITimeoutError(request=_REQUEST), FailureKind.TIMEOUT),
    (anthropic.APIConnectionError(request=_REQUEST), FailureKind.TRANSIENT),
    (anthropic.APIStatusError("overloaded", response=_response(529), body=None), FailureKind.TRANSIENT),
    (anthropic.BadRequestError("bad", response=_response(400), body=None), FailureKind.CLIENT),
])
def test_anthropic_classifies_errors(anthropic_client, error, kind):
    assert anthropic_client._classify_error(error) is kind


async def test_anthropic_joins_text_blocks(anthropic_client):
    response = SimpleNamespace(
        model="claude-test",
        content=[
            SimpleNamespace(type="text", text="Hello "),
            SimpleNamespace(type="tool_use", name="ignored"),
            SimpleNamespace(type="text", text="world"),
        ],
        usage=SimpleNamespace(input_tokens=3, output_tokens=4),
    )
    anthropic_client.client.messages.create = AsyncMock(return_value=response)

    completion = await _complete(anthropic_client)

    assert completion.text == "Hello world"
    kwargs = anthropic_client.client.messages.create.call_args.kwargs
    assert kwargs["system"] == "sys"
    assert kwargs["messages"] == [{"role": "user", "content": "usr"}]
