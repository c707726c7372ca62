"""Shared pytest fixtures for VoiceScribe test suite.

Provides a scriptable fake microphone, a mock transcriber, and sample
audio payloads used across unit and integration tests.
"""

from unittest.mock import AsyncMock

import pytest

# ---------------------------------------------------------------------------
# Capture device fakes
# ---------------------------------------------------------------------------


class FakeCaptureDevice:
    """In-memory ``CaptureDevice`` that records every call made on it.

    Args:
        flush: Fragments delivered through ``on_data`` when ``stop()`` runs.
        open_error: Raised from ``open()`` when set.
        stop_error: Raised from ``stop()`` (after flushing) when set.
    """

    mime_type = "audio/webm"

    def __init__(self, flush=(), open_error=None, stop_error=None) -> None:
        self.flush = list(flush)
        self.open_error = open_error
        self.stop_error = stop_error
        self.open_calls = 0
        self.stop_calls = 0
        self.release_calls = 0
        self._on_data = None
        self._on_error = None

    def open(self, on_data, on_error) -> None:
        self.open_calls += 1
        if self.open_error is not None:
            raise self.open_error
        self._on_data = on_data
        self._on_error = on_error

    def stop(self) -> None:
        self.stop_calls += 1
        for fragment in self.flush:
            self._on_data(fragment)
        if self.stop_error is not None:
            raise self.stop_error

    def release(self) -> None:
        self.release_calls += 1

    # -- test helpers --

    def emit(self, fragment: bytes) -> None:
        """Deliver a fragment as if the hardware produced it."""
        self._on_data(fragment)

    def fail(self, exc: Exception) -> None:
        """Report a fatal device error."""
        self._on_error(exc)


class DeviceFactory:
    """Callable factory that remembers every device it built."""

    def __init__(self, **device_kwargs) -> None:
        self.device_kwargs = device_kwargs
        self.devices: list[FakeCaptureDevice] = []

    def __call__(self) -> FakeCaptureDevice:
        device = FakeCaptureDevice(**self.device_kwargs)
        self.devices.append(device)
        return device

    @property
    def last(self) -> FakeCaptureDevice:
        return self.devices[-1]


@pytest.fixture
def device_factory():
    """Factory producing well-behaved fake microphones."""
    return DeviceFactory()


# ---------------------------------------------------------------------------
# Transcriber fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_transcriber():
    """Create a mock transcriber for the gateway.

    Returns:
        AsyncMock: A mock implementing the BaseTranscriber interface with a
        default transcription response.
    """
    from src.services.transcription.base import BaseTranscriber

    transcriber = AsyncMock(spec=BaseTranscriber)
    transcriber.transcribe.return_value = "This is a test transcription."
    return transcriber


# ---------------------------------------------------------------------------
# Audio fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_audio_bytes():
    """A small opaque payload standing in for a webm recording.

    Returns:
        bytes: EBML magic followed by filler.
    """
    return b"\x1a\x45\xdf\xa3" + b"\x00" * 256
