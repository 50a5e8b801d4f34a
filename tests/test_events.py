"""Tests for EventBus."""

from player_settings.core.events import Event, EventBus, EventType


def test_publish_reaches_subscribers_of_that_type_only():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.PLAYBACK_SPEED_CHANGED, received.append)
    bus.subscribe(EventType.SESSION_CHANGED, lambda e: received.append("wrong"))

    bus.publish(Event(EventType.PLAYBACK_SPEED_CHANGED, 2))

    assert [e.data for e in received] == [2]


def test_duplicate_subscription_is_ignored():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.SESSION_CHANGED, received.append)
    bus.subscribe(EventType.SESSION_CHANGED, received.append)

    bus.publish(Event(EventType.SESSION_CHANGED))

    assert len(received) == 1
    assert bus.subscriber_count(EventType.SESSION_CHANGED) == 1


def test_callback_may_unsubscribe_during_dispatch():
    bus = EventBus()
    received = []

    def once(event):
        received.append("once")
        unsubscribe()

    unsubscribe = bus.subscribe(EventType.SESSION_CHANGED, once)
    bus.subscribe(EventType.SESSION_CHANGED, lambda e: received.append("always"))

    bus.publish(Event(EventType.SESSION_CHANGED))
    bus.publish(Event(EventType.SESSION_CHANGED))

    assert received == ["once", "always", "always"]


def test_unsubscribe_unknown_callback_is_ignored():
    bus = EventBus()

    bus.unsubscribe(EventType.SESSION_CHANGED, print)

    assert bus.subscriber_count(EventType.SESSION_CHANGED) == 0
