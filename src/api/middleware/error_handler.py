"""
Global error handling for the FastAPI application.

Catches VoiceScribeError subclasses, request validation errors, and
unhandled exceptions, converting each into the ``{error, details?}``
JSON envelope so no fault ever leaves the gateway without a body.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.exceptions import VoiceScribeError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application.

    Registers three handlers in priority order:
    1. ``VoiceScribeError``: domain errors carry their own status and body.
    2. ``RequestValidationError``: malformed form data (400).
    3. ``Exception``: catch-all for unexpected server errors (500).

    Args:
        app: The FastAPI application instance to register handlers on.
    """

    @app.exception_handler(VoiceScribeError)
    async def voicescribe_error_handler(_request: Request, exc: VoiceScribeError) -> JSONResponse:
        """Convert domain-specific errors into the JSON error envelope."""
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle malformed request bodies."""
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request.", "details": str(exc)},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler; keeps stack traces from leaking to clients."""
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )
