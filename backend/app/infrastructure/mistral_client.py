"""Mistral Client - chat completions through mistralai.Mistral.

Invariants:
    - SDK errors carry an HTTP status: 429 -> rate limit, 5xx -> transient, other -> client
    - httpx transport errors surface unwrapped: timeouts fail fast, the rest are transient
    - Content may arrive as a string or a list of chunks; only text chunks are kept
"""

import httpx
from mistralai import Mistral, models

from app.core.domain_types import AIProvider
from app.infrastructure.llm_client import Completion, FailureKind, ResilientLLMClient


def _content_text(content) -> str:
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return "".join(getattr(chunk, "text", "") or "" for chunk in content)


class MistralClient(ResilientLLMClient):
    provider = AIProvider.MISTRAL

    def __init__(
        self,
        api_key: str,
        model: str = "mistral-medium-latest",
        timeout_seconds: int = 30,
        **retry_options,
    ):
        super().__init__(model, **retry_options)
        self.client = Mistral(api_key=api_key, timeout_ms=timeout_seconds * 1000)

    async def _call_api(
        self, *, system: str, user: str, temperature: float, max_tokens: int,
    ) -> Completion:
        response = await self.client.chat.complete_async(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        text = ""
        if response is not None and response.choices:
            text = _content_text(response.choices[0].message.content)
        usage = getattr(response, "usage", None)
        return Completion(
            text=text,
            model=getattr(response, "model", None) or self.model,
            input_tokens=getattr(usage, "prompt_tokens", None),
            output_tokens=getattr(usage, "completion_tokens", None),
        )

    def _classify_error(self, error: Exception) -> FailureKind:
        if isinstance(error, httpx.TimeoutException):
            return FailureKind.TIMEOUT
        if isinstance(error, httpx.TransportError):
            return FailureKind.TRANSIENT
        if isinstance(error, models.SDKError):
            if error.status_code == 429:
                return FailureKind.RATE_LIMIT
            if error.status_code >= 500:
                return FailureKind.TRANSIENT
            return FailureKind.CLIENT
        if isinstance(error, models.HTTPValidationError):
            return FailureKind.CLIENT
        return FailureKind.UNKNOWN
