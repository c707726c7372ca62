"""
FastAPI application factory.

``create_app()`` assembles the application with CORS, error handlers,
routers, and the health endpoint. The module-level ``app`` instance
allows ``uvicorn src.api.app:app --reload --port 3000``.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware.error_handler import register_error_handlers
from src.api.routes import transcribe
from src.core.config import get_settings
from src.core.exceptions import ConfigurationError
from src.core.logging import configure_logging
from src.core.models import HealthResponse
from src.services.transcription import BaseTranscriber, make_client

logger = logging.getLogger(__name__)


def build_default_transcriber() -> BaseTranscriber | None:
    """Build the server-wide transcriber from ``GEMINI_API_KEY``, if any.

    Absence or a failed initialization is tolerated: requests must then
    carry their own token.
    """
    settings = get_settings()
    if not settings.gemini_api_key:
        logger.warning(
            "GEMINI_API_KEY environment variable is not set. "
            "/api/transcribe will require a client-provided token."
        )
        return None
    try:
        return make_client(settings.gemini_api_key)
    except ConfigurationError as exc:
        logger.error("Failed to initialize Gemini with GEMINI_API_KEY: %s", exc.details)
        return None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the read-only default transcriber once at startup."""
    app.state.default_transcriber = build_default_transcriber()
    yield
    app.state.default_transcriber = None


def create_app() -> FastAPI:
    """Build and return a fully configured FastAPI application.

    Returns:
        FastAPI: The configured application, ready for ``uvicorn``.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="VoiceScribe",
        description="Microphone-to-text transcription gateway backed by Gemini.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.default_transcriber = None

    # -- CORS --
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Health check (root-level, not under /api) --
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health(request: Request) -> HealthResponse:
        return HealthResponse(
            timestamp=datetime.now(UTC),
            default_credential=request.app.state.default_transcriber is not None,
        )

    # -- REST routes --
    app.include_router(transcribe.router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("src.api.app:app", host=_settings.app_host, port=_settings.app_port)
