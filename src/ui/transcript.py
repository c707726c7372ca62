"""
Append-only transcript log.

Results are appended in the order their transcription calls resolve, which
may differ from the order sessions started. Empty results are dropped
without an error so the transcript only ever shows real text.
"""

import threading
from datetime import datetime

from src.ui.models import TranscriptEntry


class TranscriptLog:
    """Process-lifetime, in-memory list of transcript entries, newest last."""

    def __init__(self) -> None:
        self._entries: list[TranscriptEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[TranscriptEntry, ...]:
        return tuple(self._entries)

    def append_result(self, text: str, now: datetime | None = None) -> TranscriptEntry | None:
        """Append ``text`` with the current local time.

        Args:
            text: Transcribed text for one session.
            now: Override for the entry timestamp (tests).

        Returns:
            The new entry, or ``None`` when ``text`` is empty.
        """
        if not text:
            return None
        entry = TranscriptEntry(timestamp=now or datetime.now(), text=text)
        with self._lock:
            self._entries.append(entry)
        return entry

    def render(self) -> str:
        """Join entries as ``[HH:MM:SS] text`` lines."""
        return "\n".join(entry.render() for entry in self.entries)
