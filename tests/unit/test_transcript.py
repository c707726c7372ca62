"""Unit tests for TranscriptLog."""

from datetime import datetime

from src.ui.models import TranscriptEntry
from src.ui.transcript import TranscriptLog


def test_empty_result_is_dropped():
    log = TranscriptLog()

    assert log.append_result("") is None
    assert len(log) == 0


def test_non_empty_result_is_appended():
    log = TranscriptLog()
    before = datetime.now()

    entry = log.append_result("hello")

    assert len(log) == 1
    assert entry.text == "hello"
    assert before <= entry.timestamp <= datetime.now()
    assert log.entries[-1] is entry


def test_entries_keep_append_order():
    log = TranscriptLog()
    log.append_result("one")
    log.append_result("")
    log.append_result("two")

    assert [e.text for e in log.entries] == ["one", "two"]


def test_render_formats_timestamps():
    log = TranscriptLog()
    log.append_result("good morning", now=datetime(2026, 1, 5, 9, 3, 7))
    log.append_result("second line", now=datetime(2026, 1, 5, 14, 30, 0))

    assert log.render() == "[09:03:07] good morning\n[14:30:00] second line"


def test_render_empty_log():
    assert TranscriptLog().render() == ""


def test_entries_are_immutable_snapshot():
    log = TranscriptLog()
    log.append_result("a")

    snapshot = log.entries
    log.append_result("b")

    assert len(snapshot) == 1
    assert isinstance(snapshot[0], TranscriptEntry)
