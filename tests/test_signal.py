"""Tests for Signal and EventBus."""

from __future__ import annotations

import logging

from pagewindow.events import EventBus
from pagewindow.events.paging_events import PageLoadedEvent, PageRequestedEvent
from pagewindow.viewmodels.signal import Signal


class TestSignal:
    def test_handlers_run_in_connection_order(self):
        signal = Signal()
        calls = []
        signal.connect(lambda value: calls.append(("a", value)))
        signal.connect(lambda value: calls.append(("b", value)))

        signal.emit(1)

        assert calls == [("a", 1), ("b", 1)]

    def test_connect_is_idempotent_and_disconnect_reports(self):
        signal = Signal()
        calls = []
        handler = calls.append
        signal.connect(handler)
        signal.connect(handler)

        signal.emit("x")
        assert calls == ["x"]

        assert signal.disconnect(handler) is True
        assert signal.disconnect(handler) is False
        signal.emit("y")
        assert calls == ["x"]

    def test_failing_handler_is_logged_and_others_still_run(self, caplog):
        signal = Signal()
        calls = []

        def broken():
            raise RuntimeError("boom")

        signal.connect(broken)
        signal.connect(lambda: calls.append("ok"))

        with caplog.at_level(logging.ERROR, logger="pagewindow.viewmodels.signal"):
            signal.emit()

        assert calls == ["ok"]
        assert "boom" in caplog.text

    def test_handler_may_disconnect_itself_during_emit(self):
        signal = Signal()
        calls = []

        def once():
            calls.append("once")
            signal.disconnect(once)

        signal.connect(once)
        signal.emit()
        signal.emit()

        assert calls == ["once"]
        assert signal.handler_count == 0


class TestEventBus:
    def test_publish_reaches_subscribers_of_exact_type(self):
        bus = EventBus()
        requested, loaded = [], []
        bus.subscribe(PageRequestedEvent, requested.append)
        bus.subscribe(PageLoadedEvent, loaded.append)

        bus.publish(PageRequestedEvent(page=3))

        assert [event.page for event in requested] == [3]
        assert loaded == []

    def test_unsubscribe_stops_delivery(self):
        bus = EventBus()
        received = []
        sub = bus.subscribe(PageRequestedEvent, received.append)

        bus.unsubscribe(sub)
        bus.publish(PageRequestedEvent(page=1))

        assert received == []
        assert bus.subscriber_count(PageRequestedEvent) == 0

    def test_failing_handler_does_not_block_others(self, caplog):
        bus = EventBus()
        received = []

        def broken(event):
            raise ValueError("bad handler")

        bus.subscribe(PageRequestedEvent, broken)
        bus.subscribe(PageRequestedEvent, received.append)

        with caplog.at_level(logging.ERROR):
            bus.publish(PageRequestedEvent(page=0))

        assert len(received) == 1
        assert "bad handler" in caplog.text
