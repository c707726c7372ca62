"""Unit tests for SoundDeviceMicrophone with the PortAudio stream mocked out."""

import io
import threading
from unittest.mock import MagicMock, patch

import numpy as np
import pytest
import soundfile as sf

from src.core.config import Settings
from src.ui.errors import DeviceError, MicrophonePermissionError
from src.ui.microphone import SoundDeviceMicrophone


@pytest.fixture
def stream():
    return MagicMock()


@pytest.fixture
def mic(stream):
    with patch.object(SoundDeviceMicrophone, "_open_stream", return_value=stream):
        yield SoundDeviceMicrophone(sample_rate=16000, channels=1)


def _block(value: int, frames: int = 160) -> np.ndarray:
    return np.full((frames, 1), value, dtype=np.int16)


def test_open_starts_stream(mic, stream):
    mic.open(MagicMock(), MagicMock())

    stream.start.assert_called_once()


def test_open_failure_is_permission_error():
    with patch.object(
        SoundDeviceMicrophone, "_open_stream", side_effect=OSError("PortAudio library not found")
    ):
        mic = SoundDeviceMicrophone()
        with pytest.raises(MicrophonePermissionError, match="PortAudio"):
            mic.open(MagicMock(), MagicMock())


def test_start_failure_closes_stream(mic, stream):
    stream.start.side_effect = RuntimeError("Error querying device -1")

    with pytest.raises(MicrophonePermissionError):
        mic.open(MagicMock(), MagicMock())

    stream.close.assert_called_once()


def test_stop_delivers_single_wav_fragment(mic, stream):
    on_data = MagicMock()
    mic.open(on_data, MagicMock())
    mic._on_audio(_block(100), 160, None, None)
    mic._on_audio(_block(200), 160, None, None)

    mic.stop()

    stream.stop.assert_called_once()
    on_data.assert_called_once()
    wav = on_data.call_args.args[0]
    assert wav[:4] == b"RIFF"
    data, rate = sf.read(io.BytesIO(wav), dtype="int16")
    assert rate == 16000
    assert len(data) == 320
    assert data[0] == 100
    assert data[-1] == 200


def test_stop_without_audio_delivers_nothing(mic):
    on_data = MagicMock()
    mic.open(on_data, MagicMock())

    mic.stop()

    on_data.assert_not_called()


def test_release_closes_stream(mic, stream):
    mic.open(MagicMock(), MagicMock())

    mic.release()
    mic.release()

    stream.close.assert_called_once()


def test_unexpected_finish_reports_device_error(mic):
    reported = threading.Event()
    errors = []

    def on_error(exc):
        errors.append(exc)
        reported.set()

    mic.open(MagicMock(), on_error)
    mic._on_finished()

    assert reported.wait(timeout=5)
    assert isinstance(errors[0], DeviceError)


def test_finish_after_stop_is_silent(mic):
    on_error = MagicMock()
    mic.open(MagicMock(), on_error)

    mic.stop()
    mic._on_finished()

    on_error.assert_not_called()


def test_gateway_default_label_matches_recorded_format(monkeypatch):
    monkeypatch.delenv("GEMINI_AUDIO_MIME_TYPE", raising=False)

    settings = Settings(_env_file=None)

    assert settings.gemini_audio_mime_type == SoundDeviceMicrophone.mime_type
