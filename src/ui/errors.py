"""
Client-side error types.

None of these ever escape the UI: the voice input panel turns each into the
single visible error message and the session controller returns to idle.
"""


class MicrophoneError(Exception):
    """Base class for microphone capture failures."""


class MicrophonePermissionError(MicrophoneError):
    """Microphone access was denied or no input device is available."""


class DeviceError(MicrophoneError):
    """The capture device failed while a session was running."""


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "unknown".
    Used by the UI to display appropriate error messages.
    """

    def __init__(self, message: str, category: str = "unknown", status_code: int | None = None) -> None:
        self.message = message
        self.category = category
        self.status_code = status_code
        super().__init__(message)
