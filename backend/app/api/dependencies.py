"""API Dependencies - enhancer lookup and API key check.

Invariants:
    - The PromptEnhancer lives on app.state (built once in lifespan)
    - When settings.api_key is unset, every request is allowed
    - Key comparison is constant-time
"""

import secrets

from fastapi import Depends, Header, Request

from app.config import Settings, get_settings
from app.core.errors import AuthenticationError
from app.services.prompt_enhancer import PromptEnhancer


def get_enhancer(request: Request) -> PromptEnhancer:
    return request.app.state.enhancer


async def verify_api_key(
    x_api_key: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject the request unless X-API-Key matches the configured key."""
    if not settings.api_key:
        return
    if not x_api_key or not secrets.compare_digest(
        x_api_key.encode(), settings.api_key.encode(),
    ):
        raise AuthenticationError()
