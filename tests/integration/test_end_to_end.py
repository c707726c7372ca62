"""End-to-end: fake microphone → panel → APIClient → gateway → transcript.

The APIClient's httpx client is swapped for Starlette's ``TestClient`` (an
``httpx.Client`` subclass) so the real multipart upload reaches the app.
"""

from unittest.mock import AsyncMock

import pytest
from starlette.testclient import TestClient

from src.api.app import create_app
from src.core.exceptions import UpstreamError
from src.services.transcription.base import BaseTranscriber
from src.ui.api_client import APIClient
from src.ui.components.voice_input import STATUS_COMPLETE, STATUS_TRANSCRIBE_FAILED, VoiceInputPanel


@pytest.fixture
def gateway_transcriber():
    transcriber = AsyncMock(spec=BaseTranscriber)
    transcriber.transcribe.return_value = "hi there"
    return transcriber


@pytest.fixture
def panel(gateway_transcriber, device_factory):
    app = create_app()
    app.state.default_transcriber = gateway_transcriber
    api = APIClient(base_url="http://testserver")
    api._client = TestClient(app)
    panel = VoiceInputPanel(api, device_factory)
    yield panel
    panel.close()


def test_happy_path(panel, device_factory, gateway_transcriber):
    panel.toggle()
    device_factory.last.emit(b"fragment-1|")
    device_factory.last.emit(b"fragment-2")
    entry = panel.toggle().result(timeout=10)

    gateway_transcriber.transcribe.assert_awaited_once_with(b"fragment-1|fragment-2")
    assert device_factory.last.release_calls == 1
    assert entry.text == "hi there"
    assert [e.text for e in panel.transcript.entries] == ["hi there"]
    assert panel.message == (STATUS_COMPLETE, False)


def test_upstream_failure_surfaces_error(panel, device_factory, gateway_transcriber):
    gateway_transcriber.transcribe.side_effect = UpstreamError(details="model overloaded")

    panel.toggle()
    device_factory.last.emit(b"audio")
    assert panel.toggle().result(timeout=10) is None

    assert len(panel.transcript) == 0
    assert panel.message == ("Error: Failed to transcribe audio.", True)
    assert panel.status == STATUS_TRANSCRIBE_FAILED


def test_missing_credential_surfaces_error(panel, device_factory):
    panel.api_client._client.app.state.default_transcriber = None

    panel.toggle()
    device_factory.last.emit(b"audio")
    panel.toggle().result(timeout=10)

    message, is_error = panel.message
    assert is_error
    assert "API token is required" in message
    assert len(panel.transcript) == 0
