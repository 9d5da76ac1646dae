"""Provider Factory - picks and builds the LLM client from settings.

Invariants:
    - The requested provider is used when its API key is configured
    - Otherwise OpenAI is used when its key is configured
    - Otherwise None: the enhancer answers every request with the fallback message
"""

import logging

from app.config import Settings
from app.core.domain_types import AIProvider
from app.infrastructure.anthropic_client import AnthropicClient
from app.infrastructure.llm_client import ResilientLLMClient
from app.infrastructure.mistral_client import MistralClient
from app.infrastructure.openai_client import OpenAIClient

logger = logging.getLogger(__name__)

_CLIENTS = {
    AIProvider.OPENAI: (OpenAIClient, "openai_api_key", "openai_model"),
    AIProvider.MISTRAL: (MistralClient, "mistral_api_key", "mistral_model"),
    AIProvider.ANTHROPIC: (AnthropicClient, "anthropic_api_key", "anthropic_model"),
}


def _build(provider: AIProvider, settings: Settings) -> ResilientLLMClient | None:
    cls, key_attr, model_attr = _CLIENTS[provider]
    api_key = getattr(settings, key_attr)
    if not api_key:
        return None
    return cls(
        api_key=api_key,
        model=getattr(settings, model_attr),
        timeout_seconds=settings.llm_timeout_seconds,
        max_retries=settings.llm_max_retries,
        base_delay_ms=settings.llm_base_delay_ms,
        max_delay_ms=settings.llm_max_delay_ms,
    )


def build_llm_client(settings: Settings) -> ResilientLLMClient | None:
    """Build the configured provider client, falling back to OpenAI."""
    requested = settings.ai_provider
    client = _build(requested, settings)
    if client is None and requested is not AIProvider.OPENAI:
        logger.warning(
            f"{requested.value} requested but not configured, trying openai",
            extra={"provider": requested.value},
        )
        client = _build(AIProvider.OPENAI, settings)
    if client is None:
        logger.error(
            "No AI provider configured",
            extra={"provider": requested.value},
        )
        return None
    logger.info(
        f"LLM client ready: {client.provider.value}",
        extra={"provider": client.provider.value, "model": client.model},
    )
    return client
