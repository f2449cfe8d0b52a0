"""API test fixtures — FastAPI app behind an in-process httpx client.

Invariants:
    - No network: ASGITransport drives the app directly
    - Settings cache cleared around each test so env overrides take effect
"""

import pytest
from httpx import ASGITransport, AsyncClient

from dhi_workshop.config import get_settings
from dhi_workshop.main import app


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def client():
    """FastAPI test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
