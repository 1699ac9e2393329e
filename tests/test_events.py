"""Unit tests for :mod:`metatags.events`."""

from __future__ import annotations

import gc
import logging

import pytest

from metatags.core.colors import Color
from metatags.events import (
    ColorToggled,
    Event,
    EventBus,
    StatusMessage,
    TagAdded,
    TagRemoved,
)


class TestEventBusSubscription:
    """Tests for EventBus subscription functionality."""

    def test_subscribe_same_handler_twice(self) -> None:
        """Subscribing the same handler twice results in two invocations."""
        bus: EventBus[Event] = EventBus()
        received: list[TagAdded] = []

        def handler(event: TagAdded) -> None:
            received.append(event)

        bus.subscribe(TagAdded, handler)
        bus.subscribe(TagAdded, handler)
        bus.publish(TagAdded(name="note", is_self_closing=True))

        assert bus.handler_count(TagAdded) == 2
        assert len(received) == 2

    def test_unsubscribe_removes_one_registration(self) -> None:
        bus: EventBus[Event] = EventBus()

        def handler(event: TagAdded) -> None:
            pass

        bus.subscribe(TagAdded, handler)
        bus.subscribe(TagAdded, handler)
        bus.unsubscribe(TagAdded, handler)

        assert bus.handler_count(TagAdded) == 1

    def test_unsubscribe_unknown_handler_is_safe(self) -> None:
        bus: EventBus[Event] = EventBus()

        bus.unsubscribe(TagRemoved, lambda e: None)

        assert bus.handler_count() == 0


class TestEventBusPublishing:
    def test_publish_only_matching_type(self) -> None:
        bus: EventBus[Event] = EventBus()
        statuses: list[str] = []
        bus.subscribe(StatusMessage, lambda e: statuses.append(e.message))

        bus.publish(TagRemoved(name="n", start=0, end=4))
        bus.publish(StatusMessage(message="Removed tag 'n'."))

        assert statuses == ["Removed tag 'n'."]

    def test_publish_no_handlers_is_safe(self) -> None:
        bus: EventBus[Event] = EventBus()

        bus.publish(StatusMessage(message="orphan"))

    def test_handler_exception_is_logged_and_others_run(self, caplog: pytest.LogCaptureFixture) -> None:
        bus: EventBus[Event] = EventBus()
        received: list[int] = []

        def failing(event: ColorToggled) -> None:
            raise RuntimeError("boom")

        bus.subscribe(ColorToggled, failing)
        bus.subscribe(ColorToggled, lambda e: received.append(e.index))

        with caplog.at_level(logging.ERROR, logger="metatags.events"):
            bus.publish(ColorToggled(index=2, color=Color.named("blue"), checked=True))

        assert received == [2]
        assert "failing raised exception" in caplog.text


class TestEventBusWeakReferences:
    def test_bound_method_handler_cleaned_up_on_gc(self) -> None:
        bus: EventBus[Event] = EventBus()
        received: list[StatusMessage] = []

        class Subscriber:
            def handle(self, event: StatusMessage) -> None:
                received.append(event)

        subscriber = Subscriber()
        bus.subscribe(StatusMessage, subscriber.handle)
        bus.publish(StatusMessage(message="before gc"))

        del subscriber
        gc.collect()
        bus.publish(StatusMessage(message="after gc"))

        assert [event.message for event in received] == ["before gc"]
        assert bus.handler_count(StatusMessage) == 0

    def test_unsubscribe_bound_method(self) -> None:
        bus: EventBus[Event] = EventBus()

        class Subscriber:
            def handle(self, event: StatusMessage) -> None:
                pass

        subscriber = Subscriber()
        bus.subscribe(StatusMessage, subscriber.handle)
        bus.unsubscribe(StatusMessage, subscriber.handle)

        assert bus.handler_count(StatusMessage) == 0


def test_clear_removes_all_handlers() -> None:
    bus: EventBus[Event] = EventBus()
    bus.subscribe(TagAdded, lambda e: None)
    bus.subscribe(StatusMessage, lambda e: None)

    bus.clear()

    assert bus.handler_count() == 0
