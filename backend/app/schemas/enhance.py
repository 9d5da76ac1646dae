"""Enhance Schemas - request/response models for POST /api/v1/prompts/enhance.

Invariants:
    - EnhanceRequest.prompt: non-empty, not whitespace-only
    - Upper length bound is enforced by PromptEnhancer (settings.prompt_max_length)
    - prompt also accepted as "originalPrompt" (frontend field name)
    - Prompt is NOT stripped: the enhancer sees exactly what the user typed
"""

from pydantic import AliasChoices, BaseModel, Field, field_validator


class EnhanceRequest(BaseModel):
    """Prompt enhancement request."""
    prompt: str = Field(
        min_length=1,
        validation_alias=AliasChoices("prompt", "originalPrompt"),
    )

    @field_validator("prompt")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("prompt cannot be empty or whitespace")
        return v


class EnhanceResponse(BaseModel):
    """Enhanced prompt, or the fallback message when the provider failed."""
    original_prompt: str
    enhanced_prompt: str
    provider: str | None = None
    model: str | None = None
    fallback: bool = False
