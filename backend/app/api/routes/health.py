"""Health & Readiness Probes - liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 if no LLM provider is configured (readiness)
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_enhancer
from app.services.prompt_enhancer import PromptEnhancer

SERVICE_NAME = "prompt-enhancer-api"
SERVICE_VERSION = "1.0.0"

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/ready")
async def readiness_check(enhancer: PromptEnhancer = Depends(get_enhancer)):
    """Readiness probe: an LLM provider must be configured."""
    if enhancer.provider is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "provider_unavailable",
            },
        )
    return {
        "status": "ready",
        "checks": {"provider": enhancer.provider, "model": enhancer.model},
    }
