"""OpenAI Client - chat completions through openai.AsyncOpenAI.

Invariants:
    - SDK-level retries disabled (max_retries=0): ResilientLLMClient owns retries
    - APITimeoutError checked before APIConnectionError (it is a subclass)
    - Missing choices or empty content yield "" (never None)
"""

import openai
from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
)

from app.core.domain_types import AIProvider
from app.infrastructure.llm_client import Completion, FailureKind, ResilientLLMClient


class OpenAIClient(ResilientLLMClient):
    provider = AIProvider.OPENAI

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        timeout_seconds: int = 30,
        **retry_options,
    ):
        super().__init__(model, **retry_options)
        self.client = openai.AsyncOpenAI(
            api_key=api_key, timeout=timeout_seconds, max_retries=0,
        )

    async def _call_api(
        self, *, system: str, user: str, temperature: float, max_tokens: int,
    ) -> Completion:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""
        usage = response.usage
        return Completion(
            text=text,
            model=response.model or self.model,
            input_tokens=getattr(usage, "prompt_tokens", None),
            output_tokens=getattr(usage, "completion_tokens", None),
        )

    def _classify_error(self, error: Exception) -> FailureKind:
        if isinstance(error, RateLimitError):
            return FailureKind.RATE_LIMIT
        if isinstance(error, APITimeoutError):
            return FailureKind.TIMEOUT
        if isinstance(error, (APIConnectionError, InternalServerError)):
            return FailureKind.TRANSIENT
        if isinstance(error, APIStatusError):
            if error.status_code >= 500:
                return FailureKind.TRANSIENT
            return FailureKind.CLIENT
        return FailureKind.UNKNOWN
