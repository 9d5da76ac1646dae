"""Prompt Enhancement Route - the service's single business endpoint.

Invariants:
    - 200 for both real enhancements and the fallback message (fallback flag tells them apart)
    - 400 for invalid prompts, 401 for a bad API key, 429 past the per-client limit
"""

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_enhancer, verify_api_key
from app.api.rate_limit import enhance_rate_limit, limiter
from app.schemas.enhance import EnhanceRequest, EnhanceResponse
from app.services.prompt_enhancer import PromptEnhancer

router = APIRouter(
    prefix="/api/v1/prompts",
    tags=["prompts"],
    dependencies=[Depends(verify_api_key)],
)


@router.post("/enhance", response_model=EnhanceResponse)
@limiter.limit(enhance_rate_limit)
async def enhance_prompt(
    request: Request,
    body: EnhanceRequest,
    enhancer: PromptEnhancer = Depends(get_enhancer),
):
    """Enhance a basic prompt for better AI responses."""
    result = await enhancer.enhance(body.prompt)
    return EnhanceResponse(
        original_prompt=body.prompt,
        enhanced_prompt=result.enhanced_prompt,
        provider=result.provider,
        model=result.model,
        fallback=result.fallback,
    )
