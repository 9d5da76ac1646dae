"""Service test fixtures - settings, seeded RNG, and FastAPI test client.

Invariants:
    - Settings built explicitly (no .env, no cached get_settings)
    - app.state.enhancer replaced per test; httpx ASGITransport does not run lifespan
    - get_settings dependency overridden so API key checks use the test settings
    - Rate limit counters cleared per test
"""

import random

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.rate_limit import limiter
from app.config import Settings, get_settings
from app.main import app
from app.services.prompt_enhancer import PromptEnhancer

from tests.services.fake_llm import FakeLLMClient


@pytest.fixture
def settings():
    return Settings(_env_file=None, openai_api_key=None, api_key=None)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_enhancer(settings, rng):
    """Build a PromptEnhancer around a FakeLLMClient with the given outcomes."""
    def _make(outcomes=None, client=...):
        if client is ...:
            client = FakeLLMClient(outcomes or [])
        return PromptEnhancer(client, settings, rng=rng)
    return _make


@pytest.fixture
async def client(settings):
    """Test client; set app.state.enhancer before issuing requests."""
    app.dependency_overrides[get_settings] = lambda: settings
    app.state.enhancer = PromptEnhancer(None, settings)
    limiter.reset()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
