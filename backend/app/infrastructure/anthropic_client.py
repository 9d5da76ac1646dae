"""Anthropic Client - single-turn messages through anthropic.AsyncAnthropic.

Invariants:
    - SDK-level retries disabled (max_retries=0): ResilientLLMClient owns retries
    - HTTP 529 (overloaded) treated as transient, like 5xx
    - Response text is the concatenation of all text blocks
"""

import anthropic
from anthropic import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
)

from app.core.domain_types import AIProvider
from app.infrastructure.llm_client import Completion, FailureKind, ResilientLLMClient

# OverloadedError (HTTP 529) is not re-exported by every SDK release;
# detect via status code on APIStatusError.
_OVERLOADED_STATUS = 529


class AnthropicClient(ResilientLLMClient):
    provider = AIProvider.ANTHROPIC

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-haiku-latest",
        timeout_seconds: int = 30,
        **retry_options,
    ):
        super().__init__(model, **retry_options)
        self.client = anthropic.AsyncAnthropic(
            api_key=api_key, timeout=timeout_seconds, max_retries=0,
        )

    async def _call_api(
        self, *, system: str, user: str, temperature: float, max_tokens: int,
    ) -> Completion:
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            system=system,
            messages=[{"role": "user", "content": user}],
            temperature=temperature,
        )
        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        )
        usage = response.usage
        return Completion(
            text=text,
            model=response.model or self.model,
            input_tokens=getattr(usage, "input_tokens", None),
            output_tokens=getattr(usage, "output_tokens", None),
        )

    def _classify_error(self, error: Exception) -> FailureKind:
        if isinstance(error, RateLimitError):
            return FailureKind.RATE_LIMIT
        if isinstance(error, APITimeoutError):
            return FailureKind.TIMEOUT
        if isinstance(error, (APIConnectionError, InternalServerError)):
            return FailureKind.TRANSIENT
        if isinstance(error, APIStatusError):
            if error.status_code == _OVERLOADED_STATUS or error.status_code >= 500:
                return FailureKind.TRANSIENT
            return FailureKind.CLIENT
        return FailureKind.UNKNOWN
