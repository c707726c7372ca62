"""
Abstract base class for transcription providers.

The gateway only depends on this interface, so tests and alternative
providers can stand in for Gemini without touching the route layer.
"""

from abc import ABC, abstractmethod


class BaseTranscriber(ABC):
    """Interface that every transcription provider must implement."""

    @abstractmethod
    async def transcribe(self, audio: bytes, **kwargs) -> str:
        """Transcribe one complete audio clip.

        Args:
            audio: Raw bytes of the uploaded clip.
            **kwargs: Provider-specific options.

        Returns:
            The transcribed text, possibly empty.
        """
