"""Prompt Enhancer - validate, call the provider, clean up, append guidance.

Invariants:
    - Validation errors (missing/empty/too long) propagate to the caller
    - Provider failures (PromptEnhancerError) are logged and become the fallback message
    - The provider sees the prompt with < and > escaped; guidance uses the original
    - The fallback message carries no writing guidance block

Design Decisions:
    - LLM client injected (None when unconfigured): tests pass fakes, no test mode
    - Random source injected so guidance sampling is reproducible
"""

import logging
import random
from dataclasses import dataclass

from app.config import Settings
from app.core.content_guidance import create_content_guidance
from app.core.enhancement_prompts import (
    SYSTEM_PROMPT,
    build_fallback_message,
    build_user_message,
)
from app.core.errors import (
    ErrorContext,
    PromptEnhancerError,
    PromptTooLongError,
    PromptValidationError,
    ProviderNotConfiguredError,
)
from app.core.text_cleanup import escape_angle_brackets, postprocess_enhancement
from app.infrastructure.llm_client import ResilientLLMClient

logger = logging.getLogger(__name__)


@dataclass
class EnhancementResult:
    enhanced_prompt: str
    provider: str | None
    model: str | None
    fallback: bool = False


class PromptEnhancer:
    """Turns a basic prompt into an enhanced prompt plus writing guidance."""

    def __init__(
        self,
        client: ResilientLLMClient | None,
        settings: Settings,
        rng: random.Random | None = None,
    ):
        self.client = client
        self.settings = settings
        self.rng = rng or random.Random()  # nosec B311

    @property
    def provider(self) -> str | None:
        return self.client.provider.value if self.client else None

    @property
    def model(self) -> str | None:
        return self.client.model if self.client else None

    def validate(self, original_prompt) -> str:
        if not original_prompt or not isinstance(original_prompt, str):
            raise PromptValidationError()
        if not original_prompt.strip():
            raise PromptValidationError("Prompt cannot be empty or whitespace")
        if len(original_prompt) > self.settings.prompt_max_length:
            raise PromptTooLongError(self.settings.prompt_max_length)
        return original_prompt

    async def enhance(self, original_prompt: str) -> EnhancementResult:
        """Enhance a prompt. Returns the fallback message if the provider fails."""
        original_prompt = self.validate(original_prompt)
        sanitized = escape_angle_brackets(original_prompt)

        try:
            raw = await self._call_provider(sanitized)
            enhanced = postprocess_enhancement(raw)
            guidance = create_content_guidance(original_prompt, self.rng)
            return EnhancementResult(
                enhanced_prompt=enhanced + guidance,
                provider=self.provider,
                model=self.model,
            )
        except PromptEnhancerError as e:
            logger.error(
                f"Prompt enhancement failed: {e.message}",
                extra={
                    "error_code": e.code,
                    "provider": self.provider,
                    "prompt_length": len(original_prompt),
                },
            )
            return EnhancementResult(
                enhanced_prompt=build_fallback_message(e.message),
                provider=self.provider,
                model=self.model,
                fallback=True,
            )

    async def _call_provider(self, sanitized_prompt: str) -> str:
        if self.client is None:
            raise ProviderNotConfiguredError(self.settings.ai_provider.value)
        logger.info(
            f"Using {self.client.provider.value} for prompt enhancement",
            extra={
                "provider": self.client.provider.value,
                "prompt_length": len(sanitized_prompt),
            },
        )
        completion = await self.client.complete(
            system=SYSTEM_PROMPT,
            user=build_user_message(sanitized_prompt),
            temperature=self.settings.llm_temperature,
            max_tokens=self.settings.llm_max_tokens,
            context=ErrorContext(
                provider=self.client.provider.value, model=self.client.model,
            ),
        )
        return completion.text
