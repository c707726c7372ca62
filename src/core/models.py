"""
Pydantic v2 request / response models used across the API layer.
"""

from datetime import datetime

from pydantic import BaseModel

# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime
    default_credential: bool = False


# ---------------------------------------------------------------------------
# Transcription
# ---------------------------------------------------------------------------


class TranscriptionResponse(BaseModel):
    """POST /api/transcribe success body."""

    transcription: str = ""


class ErrorResponse(BaseModel):
    """Error envelope shared by every non-2xx gateway response."""

    error: str
    details: str | None = None
