"""
Transcription module - speech-to-text abstraction layer.

``make_client`` is the single place a transcriber is built from a
credential. It never touches shared state, so a caller-supplied token
cannot leak into other requests.
"""

from src.core.exceptions import ConfigurationError

from .base import BaseTranscriber

__all__ = ["BaseTranscriber", "make_client"]


def make_client(credential: str, **kwargs) -> BaseTranscriber:
    """
    Build a transcriber scoped to ``credential``.

    Args:
        credential: Gemini API key.
        **kwargs: Forwarded to ``GeminiTranscriber`` (model, mime_type, prompt).

    Returns:
        BaseTranscriber implementation instance

    Raises:
        ConfigurationError: If the credential is blank or the SDK rejects it
    """
    if not credential or not credential.strip():
        raise ConfigurationError(details="Empty API token")

    from .gemini import GeminiTranscriber

    try:
        return GeminiTranscriber(api_key=credential.strip(), **kwargs)
    except Exception as exc:
        raise ConfigurationError(details=str(exc)) from exc
