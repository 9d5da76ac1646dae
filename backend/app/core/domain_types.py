"""Domain Types - enums that replace raw strings across the codebase.

Invariants:
    - Provider and content domain values are encoded as str Enums (no raw string matching)
"""

from enum import Enum


class AIProvider(str, Enum):
    """Supported LLM vendors, selected via AI_PROVIDER."""
    OPENAI = "openai"
    MISTRAL = "mistral"
    ANTHROPIC = "anthropic"


class ContentDomain(str, Enum):
    """Kind of writing a prompt asks for. Drives domain-specific guidance."""
    BLOG = "blog"
    CODE = "code"
    CREATIVE = "creative"
    GENERAL = "general"
