"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """VoiceScribe settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        gemini_api_key: Server-side default credential. Empty means every
            request must carry its own ``gemini_api_token``.
        gemini_model: Gemini model used for transcription.
        api_base_url: Where the Streamlit client reaches the gateway.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Gemini ---
    gemini_api_key: str = ""  # Read once at startup; optional
    gemini_model: str = "gemini-2.0-flash-001"
    gemini_audio_mime_type: str = "audio/wav"  # Must match what the capture device records
    transcription_prompt: str = "Please transcribe the following audio:"

    # --- Application ---
    app_host: str = "0.0.0.0"  # Bind address for the FastAPI server
    app_port: int = 3000
    log_level: str = "INFO"  # Python logging level
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:8501",  # Streamlit
            "http://localhost:3000",  # Dev frontend
        ]
    )

    # --- Client ---
    api_base_url: str = "http://localhost:3000"
    api_timeout: float = 120.0  # Seconds; the gateway itself enforces none
    client_sample_rate: int = 16000
    client_channels: int = 1


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
