"""
VoiceScribe exception hierarchy.

All gateway exceptions inherit from VoiceScribeError, enabling centralized
error handling in the API middleware layer. Each one knows its HTTP status
and renders into the ``{error, details?}`` envelope.
"""


class VoiceScribeError(Exception):
    """Base exception for all VoiceScribe errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        status_code: int = 500,
        details: str | None = None,
    ) -> None:
        self.detail = detail
        self.status_code = status_code
        self.details = details
        super().__init__(detail)

    def to_body(self) -> dict:
        """Serialize into the JSON error envelope."""
        body: dict = {"error": self.detail}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(VoiceScribeError):
    """Raised when no usable Gemini credential is available."""

    def __init__(
        self,
        detail: str = (
            "API token is required. Configure it on the server "
            "or provide it in the request."
        ),
        status_code: int = 500,
        details: str | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=status_code, details=details)


class InvalidCredentialError(ConfigurationError):
    """Raised when a caller-supplied token cannot produce a client."""

    def __init__(self, details: str | None = None) -> None:
        super().__init__(
            detail="Invalid client-provided API token.",
            status_code=400,
            details=details,
        )


class ValidationError(VoiceScribeError):
    """Raised when a required input is missing from the request."""

    def __init__(self, detail: str = "Invalid request") -> None:
        super().__init__(detail=detail, status_code=400)


class UpstreamError(VoiceScribeError):
    """Raised when the Gemini call (or payload handling) fails."""

    def __init__(self, details: str | None = None) -> None:
        super().__init__(
            detail="Failed to transcribe audio.",
            status_code=500,
            details=details,
        )
