"""
Transcription endpoint.

``POST /api/transcribe`` accepts a multipart upload (``audio_file`` plus an
optional ``gemini_api_token``), picks a transcriber, forwards the clip once,
and relays the text. All failures surface as ``VoiceScribeError`` subclasses
and are rendered by the error-handler middleware.
"""

import logging

from fastapi import APIRouter, File, Form, Request, UploadFile

from src.core.exceptions import (
    ConfigurationError,
    InvalidCredentialError,
    UpstreamError,
    ValidationError,
    VoiceScribeError,
)
from src.core.models import ErrorResponse, TranscriptionResponse
from src.services.transcription import BaseTranscriber, make_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transcription"])


def resolve_transcriber(request: Request, credential: str | None) -> BaseTranscriber:
    """Pick the transcriber for this request.

    Order: caller-supplied token, then the server default built at startup.

    Raises:
        InvalidCredentialError: The caller token could not produce a client.
        ConfigurationError: Neither a caller token nor a server default exists.
    """
    if credential and credential.strip():
        logger.info("Using token provided by client for this request")
        try:
            return make_client(credential)
        except ConfigurationError as exc:
            logger.error("Could not initialize Gemini with client-provided token")
            raise InvalidCredentialError(details=exc.details or exc.detail) from exc

    default = getattr(request.app.state, "default_transcriber", None)
    if default is not None:
        logger.info("Client did not provide a token, using server's GEMINI_API_KEY")
        return default

    logger.error("No API token from client and no server default configured")
    raise ConfigurationError()


@router.post(
    "/transcribe",
    response_model=TranscriptionResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def transcribe(
    request: Request,
    audio_file: UploadFile | None = File(None),
    gemini_api_token: str | None = Form(None),
) -> TranscriptionResponse:
    """Transcribe one uploaded clip."""
    transcriber = resolve_transcriber(request, gemini_api_token)

    if audio_file is None:
        logger.warning("No audio file provided in request to /api/transcribe")
        raise ValidationError("No audio file provided.")

    try:
        audio = await audio_file.read()
        logger.info(
            "Received audio file: %s, type: %s, size: %d bytes",
            audio_file.filename,
            audio_file.content_type,
            len(audio),
        )
        text = await transcriber.transcribe(audio)
    except VoiceScribeError:
        raise
    except Exception as exc:
        logger.error("Error during transcription: %s", exc)
        raise UpstreamError(details=str(exc)) from exc

    return TranscriptionResponse(transcription=text)
