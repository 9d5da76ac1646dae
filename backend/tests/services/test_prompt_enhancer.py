"""PromptEnhancer tests - validation, provider call, post-processing, fallback.

Invariants:
    - Invalid prompts raise (never become fallback)
    - Provider sees the escaped prompt; guidance is built from the original
    - Provider failures and missing provider produce fallback=True with no guidance
"""

import pytest

from app.core.domain_types import AIProvider
from app.core.enhancement_prompts import SYSTEM_PROMPT
from app.core.errors import (
    PromptTooLongError,
    PromptValidationError,
    ProviderAPIError,
)
from app.services.prompt_enhancer import PromptEnhancer

from tests.services.fake_llm import FakeLLMClient


# --- Validation ---------------------------------------------------------------

@pytest.mark.parametrize("bad", [None, "", 42, ["list"]])
async def test_rejects_missing_or_non_string_prompt(make_enhancer, bad):
    enhancer = make_enhancer(["unused"])
    with pytest.raises(PromptValidationError):
        await enhancer.enhance(bad)


async def test_rejects_whitespace_only_prompt(make_enhancer):
    with pytest.raises(PromptValidationError):
        await make_enhancer(["unused"]).enhance("   \n\t")


async def test_rejects_prompt_over_max_length(make_enhancer, settings):
    enhancer = make_enhancer(["unused"])
    with pytest.raises(PromptTooLongError) as exc_info:
        await enhancer.enhance("x" * (settings.prompt_max_length + 1))
    assert "10000" in exc_info.value.message


async def test_accepts_prompt_at_max_length(make_enhancer, settings):
    enhancer = make_enhancer(["ok"])
    result = await enhancer.enhance("x" * settings.prompt_max_length)
    assert result.fallback is False


async def test_validation_errors_do_not_call_provider(make_enhancer):
    fake = FakeLLMClient(["unused"])
    enhancer = make_enhancer(client=fake)
    with pytest.raises(PromptValidationError):
        await enhancer.enhance("")
    assert fake.calls == []


# --- Happy path ---------------------------------------------------------------

async def test_sends_system_prompt_and_wrapped_user_message(make_enhancer, settings):
    fake = FakeLLMClient(["Better prompt"])
    await make_enhancer(client=fake).enhance("write a poem")

    call = fake.calls[0]
    assert call["system"] == SYSTEM_PROMPT
    assert call["user"] == (
        'Enhance this basic prompt to get better AI responses: "write a poem"'
    )
    assert call["temperature"] == settings.llm_temperature
    assert call["max_tokens"] == settings.llm_max_tokens


async def test_escapes_angle_brackets_before_sending(make_enhancer):
    fake = FakeLLMClient(["ok"])
    await make_enhancer(client=fake).enhance("<script>alert('x')</script>")
    sent = fake.calls[0]["user"]
    assert "<script>" not in sent
    assert "&lt;script&gt;alert('x')&lt;/script&gt;" in sent


async def test_postprocesses_response_and_appends_guidance(make_enhancer):
    enhancer = make_enhancer(["**Role**: you are a &quot;tutor&quot; &amp; guide <b>"])
    result = await enhancer.enhance("explain recursion")

    assert result.enhanced_prompt.startswith(
        'Role: you are a "tutor" & guide &lt;b&gt;\n',
    )
    assert "WRITING GUIDANCE:" in result.enhanced_prompt
    assert result.fallback is False
    assert result.provider == AIProvider.OPENAI.value
    assert result.model == "fake-model"


async def test_guidance_uses_original_prompt_domain(make_enhancer):
    result = await make_enhancer(["ok"]).enhance("Write a <b>blog</b> post")
    assert "4. DOMAIN-SPECIFIC ADVICE:" in result.enhanced_prompt
    assert "natural narrative flow" in result.enhanced_prompt


async def test_empty_provider_response_yields_guidance_only(make_enhancer):
    result = await make_enhancer([""]).enhance("hello there")
    assert result.fallback is False
    assert result.enhanced_prompt.startswith("\n--------------------------\n")


# --- Fallback -----------------------------------------------------------------

async def test_provider_error_returns_fallback(make_enhancer):
    enhancer = make_enhancer([
        ProviderAPIError("API timeout", "timeout", provider="openai"),
    ])
    result = await enhancer.enhance("summarize this")

    assert result.fallback is True
    assert result.enhanced_prompt.startswith(
        "Unable to enhance prompt. Error: openai API error (timeout): API timeout.\n\n",
    )
    assert "General Prompt Enhancement Guidelines:" in result.enhanced_prompt
    assert "WRITING GUIDANCE" not in result.enhanced_prompt


async def test_missing_provider_returns_fallback(settings, rng):
    enhancer = PromptEnhancer(None, settings, rng=rng)
    result = await enhancer.enhance("summarize this")

    assert result.fallback is True
    assert result.provider is None
    assert "No AI provider available" in result.enhanced_prompt


async def test_unexpected_exception_propagates(make_enhancer):
    enhancer = make_enhancer([RuntimeError("bug")])
    with pytest.raises(RuntimeError):
        await enhancer.enhance("summarize this")


# --- Provider metadata --------------------------------------------------------

def test_provider_and_model_reflect_client(settings):
    fake = FakeLLMClient([], provider=AIProvider.MISTRAL, model="mistral-medium-latest")
    enhancer = PromptEnhancer(fake, settings)
    assert enhancer.provider == "mistral"
    assert enhancer.model == "mistral-medium-latest"


def test_provider_is_none_without_client(settings):
    enhancer = PromptEnhancer(None, settings)
    assert enhancer.provider is None
    assert enhancer.model is None
