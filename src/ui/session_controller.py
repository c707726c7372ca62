"""
Recording session controller: handles the microphone state machine.

States: idle -> capturing -> finalizing -> idle

Only ``start()`` and ``stop()`` drive transitions. The controller owns the
capture device for the lifetime of one session: it is acquired on start and
released exactly once when the session ends, on every path.
"""

import logging
import threading
from collections.abc import Callable
from typing import Protocol

from src.ui.errors import DeviceError, MicrophoneError, MicrophonePermissionError
from src.ui.models import AudioArtifact, SessionState

logger = logging.getLogger(__name__)

DataCallback = Callable[[bytes], None]
ErrorCallback = Callable[[Exception], None]
StateCallback = Callable[[SessionState, SessionState], None]


class CaptureDevice(Protocol):
    """Microphone capability the controller depends on.

    ``open`` requests permission and starts streaming fragments to
    ``on_data``; ``stop`` flushes any pending fragments; ``release`` frees
    the hardware.
    """

    mime_type: str

    def open(self, on_data: DataCallback, on_error: ErrorCallback) -> None: ...

    def stop(self) -> None: ...

    def release(self) -> None: ...


class RecordingSessionController:
    """Toggle-style recorder enforcing a single active session.

    Args:
        device_factory: Builds a fresh capture device for each session.
        on_device_error: Called with a ``DeviceError`` when a running
            session is aborted by the device.
        on_state_change: Called with ``(from_state, to_state)``.
    """

    def __init__(
        self,
        device_factory: Callable[[], CaptureDevice],
        on_device_error: Callable[[DeviceError], None] | None = None,
        on_state_change: StateCallback | None = None,
    ) -> None:
        self._device_factory = device_factory
        self._on_device_error = on_device_error
        self._on_state_change = on_state_change

        self._lock = threading.RLock()
        self._state = SessionState.idle
        self._device: CaptureDevice | None = None
        self._chunks: list[bytes] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def buffered_bytes(self) -> int:
        return sum(len(chunk) for chunk in self._chunks)

    def start(self) -> bool:
        """Acquire the microphone and begin buffering.

        Returns:
            ``True`` if a session started, ``False`` if one is already active.

        Raises:
            MicrophoneError: Permission was denied or the device failed to
                open. The controller stays idle.
        """
        with self._lock:
            if self._state is not SessionState.idle:
                logger.debug("start ignored: session already %s", self._state)
                return False

            self._chunks = []
            device = self._device_factory()
            try:
                device.open(self._handle_data, self._handle_device_error)
            except MicrophoneError:
                self._release(device)
                raise
            except Exception as exc:
                self._release(device)
                raise MicrophonePermissionError(str(exc)) from exc

            self._device = device
            self._transition(SessionState.capturing)
            return True

    def stop(self) -> AudioArtifact | None:
        """End the session and return the assembled artifact.

        The device is stopped (flushing any final fragments) and then
        released even if stopping fails. No-op outside ``capturing``.

        Returns:
            The concatenated audio, or ``None`` if no session was capturing.
        """
        with self._lock:
            if self._state is not SessionState.capturing:
                return None

            self._transition(SessionState.finalizing)
            device = self._device
            try:
                device.stop()
            except Exception as exc:
                logger.warning("Capture device failed to stop cleanly: %s", exc)
            finally:
                self._release(device)

            artifact = AudioArtifact(data=b"".join(self._chunks), mime_type=device.mime_type)
            self._chunks = []
            self._transition(SessionState.idle)

        logger.info("Session finalized: %d bytes (%s)", artifact.size, artifact.mime_type)
        return artifact

    # ------------------------------------------------------------------
    # Device callbacks
    # ------------------------------------------------------------------

    def _handle_data(self, fragment: bytes) -> None:
        if not fragment:
            return
        with self._lock:
            # Flushes delivered by device.stop() land while finalizing.
            if self._state is SessionState.idle:
                return
            self._chunks.append(bytes(fragment))

    def _handle_device_error(self, exc: Exception) -> None:
        """Abort the running session after a fatal device failure."""
        with self._lock:
            if self._state is not SessionState.capturing:
                return
            logger.error("Capture device failed mid-session: %s", exc)
            self._transition(SessionState.finalizing)
            device = self._device
            try:
                device.stop()
            except Exception as stop_exc:
                logger.warning("Capture device failed to stop after error: %s", stop_exc)
            finally:
                self._release(device)
            self._chunks = []
            self._transition(SessionState.idle)

        if self._on_device_error:
            error = exc if isinstance(exc, DeviceError) else DeviceError(str(exc))
            self._on_device_error(error)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _release(self, device: CaptureDevice | None) -> None:
        if device is None:
            return
        try:
            device.release()
        except Exception as exc:
            logger.warning("Capture device release failed: %s", exc)
        if self._device is device:
            self._device = None

    def _transition(self, to_state: SessionState) -> None:
        from_state = self._state
        if from_state == to_state:
            return
        self._state = to_state
        if self._on_state_change:
            self._on_state_change(from_state, to_state)
