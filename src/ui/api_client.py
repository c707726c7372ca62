"""
Synchronous HTTP client for the VoiceScribe gateway.

Uses ``httpx.Client`` (sync); calls are made from the voice input panel's
worker thread so the Streamlit script never waits on them.
"""

import logging

import httpx
import streamlit as st

from src.core.config import get_settings
from src.ui.errors import APIError
from src.ui.models import AudioArtifact

logger = logging.getLogger(__name__)


class APIClient:
    """Thin synchronous wrapper around httpx for calling the FastAPI gateway.

    All methods return parsed JSON or raise ``APIError`` with user-friendly
    messages for display in the UI.
    """

    def __init__(self, base_url: str = "http://localhost:3000", timeout: float = 120.0) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the VoiceScribe FastAPI gateway.
            timeout: Per-request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self._base_url, timeout=timeout)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Args:
            method: HTTP method name ("get", "post").
            path: API endpoint path (e.g. "/api/transcribe").
            **kwargs: Passed through to httpx (files, data, timeout, etc.).

        Returns:
            The httpx Response object with a successful status code.

        Raises:
            APIError: On connection, timeout, HTTP status, or network errors.
        """
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                "Backend server is not running. "
                "Start it with: `uvicorn src.api.app:app --port 3000`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            raise APIError(
                _error_message(exc.response),
                category="http",
                status_code=exc.response.status_code,
            ) from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    # -- health --

    def health_check(self) -> dict:
        return self._request("get", "/health").json()

    def check_connection(self) -> tuple[bool, str]:
        """Check if the gateway is reachable. Returns (ok, message)."""
        try:
            self.health_check()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- transcription --

    def transcribe(self, artifact: AudioArtifact, api_token: str | None = None) -> str:
        """Upload one artifact and return its transcription (may be empty)."""
        kwargs: dict = {
            "files": {"audio_file": (artifact.filename, artifact.data, artifact.mime_type)},
        }
        if api_token:
            kwargs["data"] = {"gemini_api_token": api_token}
        body = self._request("post", "/api/transcribe", **kwargs).json()
        return body.get("transcription") or ""


def _error_message(response: httpx.Response) -> str:
    """Pull ``error`` (then ``details``) out of a gateway error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or "Transcription failed"
    if not isinstance(body, dict):
        return response.text or "Transcription failed"
    return body.get("error") or body.get("details") or "Transcription failed"


@st.cache_resource
def get_api_client(base_url: str = "http://localhost:3000") -> APIClient:
    """Return a cached APIClient, keyed by base_url.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    When the base URL changes (e.g. user updates sidebar), a new client
    is created automatically because the cache key includes the parameter.
    """
    return APIClient(base_url=base_url, timeout=get_settings().api_timeout)
