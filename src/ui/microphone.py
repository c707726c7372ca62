"""
Microphone capture device backed by ``sounddevice``.

PCM blocks from the input stream are buffered internally and encoded into
a single WAV fragment with ``soundfile`` when the device is stopped, the
same way a browser MediaRecorder without a timeslice delivers one blob.
"""

import io
import logging
import threading

import numpy as np
import soundfile as sf

from src.ui.errors import DeviceError, MicrophonePermissionError
from src.ui.session_controller import DataCallback, ErrorCallback

logger = logging.getLogger(__name__)


class SoundDeviceMicrophone:
    """``CaptureDevice`` implementation for the default input device.

    Args:
        sample_rate: Capture rate in Hz.
        channels: Number of input channels.
        device: Optional sounddevice device index or name.
    """

    mime_type = "audio/wav"

    def __init__(
        self,
        sample_rate: int = 16000,
        channels: int = 1,
        device: int | str | None = None,
    ) -> None:
        self.sample_rate = sample_rate
        self.channels = channels
        self._device = device
        self._stream = None
        self._blocks: list[np.ndarray] = []
        self._lock = threading.Lock()
        self._stopping = False
        self._on_data: DataCallback | None = None
        self._on_error: ErrorCallback | None = None

    def open(self, on_data: DataCallback, on_error: ErrorCallback) -> None:
        """Open and start the input stream.

        Raises:
            MicrophonePermissionError: No usable input device, or the OS
                refused access.
        """
        self._on_data = on_data
        self._on_error = on_error
        self._blocks = []
        self._stopping = False
        try:
            self._stream = self._open_stream()
            self._stream.start()
        except Exception as exc:
            # PortAudioError, an invalid device, or PortAudio missing entirely
            self._stopping = True
            if self._stream is not None:
                self._stream.close()
                self._stream = None
            raise MicrophonePermissionError(str(exc)) from exc

    def stop(self) -> None:
        """Stop the stream and deliver the buffered audio as one WAV fragment."""
        if self._stream is None:
            return
        self._stopping = True
        self._stream.stop()

        with self._lock:
            blocks, self._blocks = self._blocks, []
        if blocks and self._on_data is not None:
            self._on_data(self._encode_wav(np.concatenate(blocks)))

    def release(self) -> None:
        """Close the stream and drop any unflushed audio."""
        self._stopping = True
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        with self._lock:
            self._blocks = []

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _open_stream(self):
        import sounddevice as sd

        return sd.InputStream(
            samplerate=self.sample_rate,
            channels=self.channels,
            dtype="int16",
            device=self._device,
            callback=self._on_audio,
            finished_callback=self._on_finished,
        )

    def _on_audio(self, indata: np.ndarray, frames: int, time_info, status) -> None:
        if status:
            logger.debug("Input stream status: %s", status)
        with self._lock:
            self._blocks.append(indata.copy())

    def _on_finished(self) -> None:
        if self._stopping or self._on_error is None:
            return
        # Report from a separate thread: the handler stops and closes this stream.
        threading.Thread(
            target=self._on_error,
            args=(DeviceError("Input stream stopped unexpectedly"),),
            daemon=True,
        ).start()

    def _encode_wav(self, pcm: np.ndarray) -> bytes:
        buf = io.BytesIO()
        sf.write(buf, pcm, self.sample_rate, format="WAV", subtype="PCM_16")
        return buf.getvalue()
