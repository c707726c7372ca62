"""Client-side data types for recording sessions and the transcript."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class SessionState(StrEnum):
    """Lifecycle of one recording session."""

    idle = "idle"
    capturing = "capturing"
    finalizing = "finalizing"


@dataclass(frozen=True)
class AudioArtifact:
    """The finalized audio payload of one session, consumed by one upload."""

    data: bytes
    mime_type: str = "audio/webm"

    @property
    def filename(self) -> str:
        """Upload label derived from the encoding, e.g. ``recording.webm``."""
        return f"recording.{self.mime_type.split('/')[-1].split(';')[0]}"

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class TranscriptEntry:
    """One transcription result as shown in the transcript."""

    timestamp: datetime
    text: str

    def render(self) -> str:
        return f"[{self.timestamp.strftime('%H:%M:%S')}] {self.text}"
