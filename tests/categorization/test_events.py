"""Tests for the run event stream and the cancellation token."""

import logging

import pytest

from cancellation import CancellationToken
from categorization.events import EventLevel, EventStream, Progress
from errors import OperationCancelled


class TestEventStream:
    def test_events_reach_listeners_in_order(self):
        stream = EventStream()
        seen = []
        stream.subscribe(on_event=seen.append)

        stream.info("Fetching categories...")
        stream.ok("Found 3 active categories.")
        stream.error("Fatal error: boom")

        assert [(e.level, e.message) for e in seen] == [
            (EventLevel.INFO, "Fetching categories..."),
            (EventLevel.OK, "Found 3 active categories."),
            (EventLevel.ERROR, "Fatal error: boom"),
        ]
        assert stream.events == seen

    def test_events_are_mirrored_to_logger(self, caplog):
        stream = EventStream()

        with caplog.at_level(logging.INFO):
            stream.ok("Updated x -> Groceries")
            stream.warn("Skipped: x")

        assert "✓ Updated x -> Groceries" in caplog.text
        assert [r.levelno for r in caplog.records] == [logging.INFO, logging.WARNING]

    def test_progress(self):
        stream = EventStream()
        seen = []
        stream.subscribe(on_progress=seen.append)

        stream.update_progress(1, 4)

        assert seen == [Progress(1, 4)]
        assert stream.progress.percent == 25.0

    def test_progress_percent_is_clamped(self):
        assert Progress(0, 0).percent == 0.0
        assert Progress(5, 4).percent == 100.0


class TestCancellationToken:
    def test_cancel_once(self):
        token = CancellationToken()

        assert token.cancel() is True
        assert token.cancel() is False
        assert token.cancelled

    def test_raise_if_cancelled(self):
        token = CancellationToken()
        token.raise_if_cancelled()

        token.cancel()

        with pytest.raises(OperationCancelled):
            token.raise_if_cancelled()

    def test_callbacks_fire_once(self):
        token = CancellationToken()
        calls = []
        token.add_callback(lambda: calls.append("a"))

        token.cancel()
        token.cancel()

        assert calls == ["a"]

    def test_callback_added_after_cancel_fires_immediately(self):
        token = CancellationToken()
        token.cancel()
        calls = []

        token.add_callback(lambda: calls.append("late"))

        assert calls == ["late"]

    def test_removed_callback_does_not_fire(self):
        token = CancellationToken()
        calls = []

        def callback():
            calls.append("x")

        token.add_callback(callback)
        token.remove_callback(callback)
        token.cancel()

        assert calls == []
