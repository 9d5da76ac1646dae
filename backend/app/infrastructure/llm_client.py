"""Resilient LLM Client - vendor-neutral retry, backoff, and error mapping.

Invariants:
    - Rate limits: exponential backoff with jitter, respects Retry-After header
    - Transient errors (5xx, connection, overloaded): max_retries with exponential backoff
    - Timeouts and client errors (4xx except 429): immediate failure, no retry
    - All failures mapped to ProviderAPIError (core/errors.py)
    - Vendor SDK retries are disabled by subclasses; this class owns the retry budget

Design Decisions:
    - Subclasses implement two hooks: _call_api (one SDK request -> Completion)
      and _classify_error (SDK exception -> FailureKind)
"""

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from app.core.domain_types import AIProvider
from app.core.errors import ErrorContext, ProviderAPIError

logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    """How a vendor exception is treated by the retry loop."""
    RATE_LIMIT = "rate_limit"
    TRANSIENT = "connection_error"
    TIMEOUT = "timeout"
    CLIENT = "client_error"
    UNKNOWN = "unknown"


@dataclass
class Completion:
    """Vendor-neutral chat completion result."""
    text: str
    model: str
    input_tokens: int | None = None
    output_tokens: int | None = None


class ResilientLLMClient(ABC):
    """Base class: wraps one vendor SDK with retry logic and error mapping."""

    provider: AIProvider

    def __init__(
        self,
        model: str,
        max_retries: int = 2,
        base_delay_ms: int = 1000,
        max_delay_ms: int = 10_000,
    ):
        self.model = model
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def complete(
        self,
        *,
        system: str,
        user: str,
        temperature: float,
        max_tokens: int,
        context: ErrorContext | None = None,
    ) -> Completion:
        """Single-turn chat completion with automatic retry on transient failures."""
        context = context or ErrorContext()
        context.provider = context.provider or self.provider.value
        context.model = context.model or self.model

        for attempt in range(self.max_retries + 1):
            try:
                completion = await self._call_api(
                    system=system, user=user,
                    temperature=temperature, max_tokens=max_tokens,
                )
                self._log_success(completion, attempt)
                return completion
            except Exception as e:
                kind = self._classify_error(e)
                if kind is FailureKind.RATE_LIMIT:
                    await self._handle_rate_limit(e, attempt, context)
                elif kind is FailureKind.TRANSIENT:
                    await self._handle_transient_error(e, attempt, context)
                elif kind is FailureKind.TIMEOUT:
                    raise ProviderAPIError(
                        "API timeout", kind.value, context=context,
                    ) from e
                elif kind is FailureKind.CLIENT:
                    raise ProviderAPIError(
                        str(e), kind.value, context=context,
                    ) from e
                else:
                    logger.error(
                        f"Unexpected {self.provider.value} error: {e}",
                        exc_info=True,
                        extra={"provider": self.provider.value},
                    )
                    raise ProviderAPIError(
                        str(e), kind.value, context=context,
                    ) from e

        # Unreachable: the last attempt either returns or raises.
        raise ProviderAPIError(
            "Retry budget exhausted", FailureKind.TRANSIENT.value, context=context,
        )

    @abstractmethod
    async def _call_api(
        self, *, system: str, user: str, temperature: float, max_tokens: int,
    ) -> Completion:
        """One SDK request, no retries."""

    @abstractmethod
    def _classify_error(self, error: Exception) -> FailureKind:
        """Map a vendor exception to how the retry loop treats it."""

    def _log_success(self, completion: Completion, attempt: int) -> None:
        logger.info(
            f"{self.provider.value} API success",
            extra={
                "provider": self.provider.value,
                "model": completion.model,
                "attempt": attempt + 1,
                "input_tokens": completion.input_tokens,
                "output_tokens": completion.output_tokens,
            },
        )

    async def _handle_rate_limit(
        self, e: Exception, attempt: int, context: ErrorContext,
    ) -> None:
        """Handle rate limit error with retry or raise."""
        retry_after_ms = self._extract_retry_after(e)
        if attempt >= self.max_retries:
            raise ProviderAPIError(
                "Rate limit exceeded after retries",
                FailureKind.RATE_LIMIT.value,
                retry_after_ms=retry_after_ms,
                context=context,
            ) from e
        delay = retry_after_ms or self._backoff(attempt)
        logger.warning(
            f"Rate limit hit, retry after {delay}ms (attempt {attempt + 1})",
            extra={"provider": self.provider.value, "attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(
        self, e: Exception, attempt: int, context: ErrorContext,
    ) -> None:
        """Handle transient errors with retry or raise."""
        if attempt >= self.max_retries:
            raise ProviderAPIError(
                f"Transient failure after {self.max_retries} retries: {e}",
                FailureKind.TRANSIENT.value,
                context=context,
            ) from e
        delay = self._backoff(attempt)
        logger.warning(
            f"Transient error, retry after {delay}ms: {e}",
            extra={"provider": self.provider.value, "attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    @staticmethod
    def _extract_retry_after(error: Exception) -> int | None:
        """Extract Retry-After header in milliseconds, if the SDK exposes the response."""
        response = getattr(error, "response", None) or getattr(error, "raw_response", None)
        headers = getattr(response, "headers", None)
        if not headers:
            return None
        val = headers.get("retry-after")
        try:
            return int(float(val) * 1000) if val else None
        except (TypeError, ValueError):
            return None
