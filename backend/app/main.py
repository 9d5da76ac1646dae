"""Prompt Enhancer API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PromptEnhancerError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - slowapi limiter registered on app.state before any request
    - LLM client and PromptEnhancer built once on startup via lifespan
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.error_handlers import register_error_handlers
from app.api.rate_limit import limiter
from app.api.routes import enhance, health
from app.config import get_settings
from app.infrastructure.observability import setup_logging
from app.infrastructure.provider_factory import build_llm_client
from app.services.prompt_enhancer import PromptEnhancer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.enhancer = PromptEnhancer(build_llm_client(settings), settings)
    logger.info(
        "Prompt Enhancer API started",
        extra={"provider": app.state.enhancer.provider},
    )
    yield
    logger.info("Prompt Enhancer API shutting down")


app = FastAPI(
    title="Prompt Enhancer API", version=health.SERVICE_VERSION, lifespan=lifespan,
)
# slowapi looks the limiter up on app.state
app.state.limiter = limiter

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(enhance.router)

# Serves the React build when present; mounted after the API routes so
# /api/v1/* takes precedence.
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),  # nosec B104
        port=int(os.environ.get("PORT", "5000")),
    )
