"""
Gemini transcription provider.

Uses the ``google-genai`` SDK (``genai.Client``) to send one inline audio
part plus a fixed instruction prompt. Generation parameters and safety
thresholds are fixed module constants and are applied to every call.
There is deliberately no retry: one failure is one failed request.
"""

import logging

from google import genai
from google.genai import types

from src.core.config import get_settings
from src.core.exceptions import UpstreamError
from src.services.transcription.base import BaseTranscriber

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
TOP_K = 1
TOP_P = 1.0
MAX_OUTPUT_TOKENS = 2048

SAFETY_CATEGORIES = (
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


def build_generation_config() -> types.GenerateContentConfig:
    """Return the fixed generation + safety config sent with every request."""
    return types.GenerateContentConfig(
        temperature=TEMPERATURE,
        top_k=TOP_K,
        top_p=TOP_P,
        max_output_tokens=MAX_OUTPUT_TOKENS,
        safety_settings=[
            types.SafetySetting(
                category=category,
                threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
            )
            for category in SAFETY_CATEGORIES
        ],
    )


class GeminiTranscriber(BaseTranscriber):
    """Transcription provider backed by a single ``genai.Client``.

    Args:
        api_key: Credential the client is scoped to.
        model: Gemini model name (defaults to ``settings.gemini_model``).
        mime_type: MIME label for the inline audio part.
        prompt: Instruction text preceding the audio part.
    """

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        mime_type: str | None = None,
        prompt: str | None = None,
    ) -> None:
        settings = get_settings()
        self._model = model or settings.gemini_model
        self._mime_type = mime_type or settings.gemini_audio_mime_type
        self._prompt = prompt or settings.transcription_prompt
        self._config = build_generation_config()
        self._client = genai.Client(api_key=api_key)

    @property
    def model(self) -> str:
        return self._model

    def build_contents(self, audio: bytes) -> list[types.Content]:
        """Assemble the single user turn: prompt text followed by inline audio.

        The SDK base64-encodes ``inline_data`` bytes on the wire.
        """
        return [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_text(text=self._prompt),
                    types.Part.from_bytes(data=audio, mime_type=self._mime_type),
                ],
            )
        ]

    async def transcribe(self, audio: bytes, **kwargs) -> str:
        """Send the clip to Gemini and return the response text.

        Raises:
            UpstreamError: On any SDK, network, or response-handling failure.
        """
        logger.info(
            "Sending %d bytes to Gemini (%s) with MIME type %s",
            len(audio),
            self._model,
            self._mime_type,
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=self.build_contents(audio),
                config=self._config,
            )
            text = response.text or ""
        except Exception as exc:
            logger.error("Gemini transcription failed: %s", exc)
            raise UpstreamError(details=str(exc)) from exc

        logger.info("Transcription successful (%d chars)", len(text))
        return text
