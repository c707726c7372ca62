"""
Voice input component: record, transcribe, and show the running transcript.

``VoiceInputPanel`` owns the session controller and the transcript log and
lives in ``st.session_state`` across reruns. Stopping a session hands the
artifact to a background worker, so the script never blocks on the
gateway; the transcript fragment polls until the call resolves.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

import streamlit as st

from src.core.config import get_settings
from src.ui.api_client import APIClient, get_api_client
from src.ui.errors import APIError, DeviceError, MicrophoneError
from src.ui.microphone import SoundDeviceMicrophone
from src.ui.models import AudioArtifact, SessionState, TranscriptEntry
from src.ui.session_controller import CaptureDevice, RecordingSessionController
from src.ui.transcript import TranscriptLog

logger = logging.getLogger(__name__)

STATUS_READY = "Click the button to start voice input."
STATUS_LISTENING = "Listening... Click to stop."
STATUS_TRANSCRIBING = "Transcribing audio..."
STATUS_COMPLETE = "Transcription complete. Click to start again."
STATUS_TRANSCRIBE_FAILED = "Error during transcription. Please try again."
STATUS_MIC_FAILED = "Could not start listening. Check microphone permissions."
STATUS_RECORDING_FAILED = "Recording stopped unexpectedly. Click to start again."


class VoiceInputPanel:
    """UI-agnostic state behind the voice input component.

    Exactly one of ``status`` / ``error`` is meant to be displayed: the
    error when set, otherwise the status.

    Args:
        api_client: Gateway client used for each transcription call.
        device_factory: Builds a capture device per session.
        executor: Runs transcription calls. Defaults to one worker thread
            owned by the panel and shut down by ``close()``.
    """

    def __init__(
        self,
        api_client: APIClient,
        device_factory: Callable[[], CaptureDevice],
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self.api_client = api_client
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="transcribe"
        )
        self._owns_executor = executor is None
        self._lock = threading.Lock()

        self.controller = RecordingSessionController(
            device_factory, on_device_error=self._on_device_error
        )
        self.transcript = TranscriptLog()
        self.api_token = ""
        self.status = STATUS_READY
        self.error = ""

    @property
    def is_listening(self) -> bool:
        return self.controller.state is SessionState.capturing

    @property
    def message(self) -> tuple[str, bool]:
        """The one visible message and whether it is an error."""
        with self._lock:
            if self.error:
                return self.error, True
            return self.status, False

    def toggle(self) -> Future | None:
        """Start listening when idle, otherwise stop and transcribe."""
        self._set_message(error="")
        if self.is_listening:
            return self.stop()
        self.start()
        return None

    def start(self) -> bool:
        try:
            started = self.controller.start()
        except MicrophoneError as exc:
            logger.warning("Error accessing microphone: %s", exc)
            self._set_message(
                status=STATUS_MIC_FAILED,
                error=f"Error accessing microphone: {exc}. Please ensure permission is granted.",
            )
            return False
        if started:
            self._set_message(status=STATUS_LISTENING, error="")
        return started

    def stop(self) -> Future | None:
        """Finalize the session and dispatch its transcription.

        Returns:
            The future of the detached transcription call, or ``None`` when
            nothing was recording.
        """
        artifact = self.controller.stop()
        if artifact is None:
            return None
        self._set_message(status=STATUS_TRANSCRIBING, error="")
        future = self._executor.submit(
            self._transcribe, self.api_client, artifact, self.api_token.strip()
        )
        return future

    def close(self) -> None:
        """Abandon any capture in progress and stop the owned worker.

        A shared executor passed in by the caller is left running.
        Transcriptions already dispatched still complete.
        """
        if self.controller.stop() is not None:
            logger.info("Discarded in-progress recording on close")
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _transcribe(
        self, client: APIClient, artifact: AudioArtifact, api_token: str
    ) -> TranscriptEntry | None:
        """Worker-thread body: one gateway call, then update the panel."""
        try:
            text = client.transcribe(artifact, api_token=api_token or None)
        except APIError as exc:
            logger.warning("Transcription error (%s): %s", exc.category, exc.message)
            self._set_message(status=STATUS_TRANSCRIBE_FAILED, error=f"Error: {exc.message}")
            return None
        except Exception as exc:
            logger.exception("Unexpected transcription error")
            message = str(exc) or "An unknown error occurred during transcription."
            self._set_message(status=STATUS_TRANSCRIBE_FAILED, error=f"Error: {message}")
            return None

        entry = self.transcript.append_result(text)
        self._set_message(status=STATUS_COMPLETE, error="")
        return entry

    def _on_device_error(self, exc: DeviceError) -> None:
        logger.warning("Recording aborted: %s", exc)
        self._set_message(status=STATUS_RECORDING_FAILED, error=f"Error during recording: {exc}")

    def _set_message(self, status: str | None = None, error: str | None = None) -> None:
        with self._lock:
            if status is not None:
                self.status = status
            if error is not None:
                self.error = error


# ---------------------------------------------------------------------------
# Streamlit rendering
# ---------------------------------------------------------------------------


def _default_device_factory() -> CaptureDevice:
    settings = get_settings()
    return SoundDeviceMicrophone(
        sample_rate=settings.client_sample_rate,
        channels=settings.client_channels,
    )


@st.cache_resource
def get_transcription_executor() -> ThreadPoolExecutor:
    """Worker pool shared by every browser session."""
    return ThreadPoolExecutor(max_workers=4, thread_name_prefix="transcribe")


def get_panel() -> VoiceInputPanel:
    """Return the panel stored in session state, creating it on first use."""
    client = get_api_client(st.session_state.get("api_base_url", get_settings().api_base_url))
    if "voice_input_panel" not in st.session_state:
        st.session_state.voice_input_panel = VoiceInputPanel(
            client, _default_device_factory, executor=get_transcription_executor()
        )
    panel = st.session_state.voice_input_panel
    # Follow the sidebar URL; in-flight calls keep the client they started with.
    panel.api_client = client
    return panel


def render_voice_input() -> None:
    """Render the token field, the toggle button, and the transcript."""
    panel = get_panel()

    panel.api_token = st.text_input(
        "Gemini API token",
        value=panel.api_token,
        type="password",
        placeholder="Enter your Gemini API Token",
        help="Optional when the server has GEMINI_API_KEY configured. "
        "Get a key from https://aistudio.google.com/app/apikey",
    )

    _render_session()


@st.fragment(run_every=1.0)
def _render_session() -> None:
    """Button, status line and transcript; reruns on a timer to pick up changes."""
    panel = get_panel()

    # Label and on_click come from one read of the controller state.
    listening = panel.is_listening
    st.button(
        "Stop Listening" if listening else "Start Listening",
        type="primary" if listening else "secondary",
        on_click=panel.stop if listening else panel.start,
        use_container_width=True,
    )
    if listening:
        st.markdown(":red[● Recording...]")

    message, is_error = panel.message
    if is_error:
        st.error(message)
    else:
        st.caption(message)

    st.subheader("Transcribed Text")
    transcript = panel.transcript.render()
    if transcript:
        st.code(transcript, language=None)
    else:
        st.info("Your transcribed text will appear here...")
