"""Integration test fixtures for VoiceScribe.

Provides an async HTTP client bound to a fresh application. The lifespan
is not run by ``ASGITransport``, so each test decides whether a server
default transcriber exists by setting ``app.state.default_transcriber``.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app


@pytest.fixture
def app():
    """Create a fresh FastAPI application instance with no default credential."""
    app = create_app()
    app.state.default_transcriber = None
    return app


@pytest.fixture
async def async_client(app):
    """AsyncClient talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
