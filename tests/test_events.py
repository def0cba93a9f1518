"""Unit tests for :mod:`grove.events`."""

from __future__ import annotations

import gc
import logging
from dataclasses import dataclass

import pytest

from grove.events import DocumentSaved, Event, EventBus, ProjectOpened


@dataclass(slots=True)
class SampleEvent(Event):
    """A sample event for testing."""

    message: str
    value: int = 0


class _Listener:
    def __init__(self) -> None:
        self.received: list[SampleEvent] = []

    def on_event(self, event: SampleEvent) -> None:
        self.received.append(event)


class TestEventBusSubscription:
    """Tests for subscription bookkeeping."""

    def test_subscribe_adds_handler(self) -> None:
        bus: EventBus[Event] = EventBus()

        bus.subscribe(SampleEvent, lambda event: None)

        assert bus.handler_count(SampleEvent) == 1
        assert bus.handler_count() == 1

    def test_unsubscribe_removes_first_registration(self) -> None:
        bus: EventBus[Event] = EventBus()
        received: list[SampleEvent] = []

        def handler(event: SampleEvent) -> None:
            received.append(event)

        bus.subscribe(SampleEvent, handler)
        bus.subscribe(SampleEvent, handler)
        bus.unsubscribe(SampleEvent, handler)
        bus.publish(SampleEvent(message="once"))

        assert bus.handler_count(SampleEvent) == 1
        assert [event.message for event in received] == ["once"]

    def test_unsubscribe_unknown_handler_is_ignored(self) -> None:
        bus: EventBus[Event] = EventBus()

        bus.unsubscribe(SampleEvent, lambda event: None)

        assert bus.handler_count() == 0

    def test_clear_drops_everything(self) -> None:
        bus: EventBus[Event] = EventBus()
        bus.subscribe(SampleEvent, lambda event: None)
        bus.subscribe(ProjectOpened, lambda event: None)

        bus.clear()

        assert bus.handler_count() == 0


class TestEventBusPublish:
    """Tests for event delivery."""

    def test_publish_delivers_only_matching_type(self) -> None:
        bus: EventBus[Event] = EventBus()
        saved: list[DocumentSaved] = []
        bus.subscribe(DocumentSaved, saved.append)

        bus.publish(SampleEvent(message="ignored"))
        bus.publish(DocumentSaved(path="/tmp/a.txt"))

        assert saved == [DocumentSaved(path="/tmp/a.txt")]

    def test_failing_handler_does_not_block_others(self, caplog: pytest.LogCaptureFixture) -> None:
        bus: EventBus[Event] = EventBus()
        received: list[SampleEvent] = []

        def broken(event: SampleEvent) -> None:
            raise RuntimeError("boom")

        bus.subscribe(SampleEvent, broken)
        bus.subscribe(SampleEvent, received.append)

        with caplog.at_level(logging.ERROR, logger="grove.events"):
            bus.publish(SampleEvent(message="still delivered"))

        assert len(received) == 1
        assert "broken" in caplog.text

    def test_bound_methods_are_held_weakly(self) -> None:
        bus: EventBus[Event] = EventBus()
        listener = _Listener()
        bus.subscribe(SampleEvent, listener.on_event)

        bus.publish(SampleEvent(message="alive"))
        assert len(listener.received) == 1

        del listener
        gc.collect()
        bus.publish(SampleEvent(message="gone"))

        assert bus.handler_count(SampleEvent) == 0

    def test_handler_may_unsubscribe_itself_during_publish(self) -> None:
        bus: EventBus[Event] = EventBus()
        calls: list[str] = []

        def once(event: SampleEvent) -> None:
            calls.append(event.message)
            bus.unsubscribe(SampleEvent, once)

        bus.subscribe(SampleEvent, once)
        bus.publish(SampleEvent(message="first"))
        bus.publish(SampleEvent(message="second"))

        assert calls == ["first"]
