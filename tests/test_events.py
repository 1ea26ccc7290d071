"""Tests for the event bus."""
import logging

from spinwheel.core.events import Event, EventBus, EventType


def test_subscribe_and_unsubscribe():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(EventType.SPIN_STARTED, received.append)

    bus.emit(Event(EventType.SPIN_STARTED, {"target_index": 1}))
    bus.emit(Event(EventType.SPIN_COMPLETED))
    assert [e.data for e in received] == [{"target_index": 1}]

    unsubscribe()
    bus.emit(Event(EventType.SPIN_STARTED))
    assert len(received) == 1


def test_subscribe_all_sees_everything():
    bus = EventBus()
    received = []
    bus.subscribe_all(lambda e: received.append(e.type))

    bus.emit(Event(EventType.SPIN_STARTED))
    bus.emit(Event("custom"))
    assert received == [EventType.SPIN_STARTED, "custom"]


def test_handler_errors_are_logged(caplog):
    bus = EventBus()
    received = []

    def broken(event):
        raise ValueError("handler failed")

    bus.subscribe(EventType.WHEEL_RESET, broken)
    bus.subscribe(EventType.WHEEL_RESET, received.append)

    with caplog.at_level(logging.ERROR):
        bus.emit(Event(EventType.WHEEL_RESET))

    assert len(received) == 1
    assert any("handler failed" in r.getMessage() for r in caplog.records)


def test_history_is_bounded():
    bus = EventBus(history_limit=3)
    for i in range(5):
        bus.emit(Event(EventType.STATE_CHANGED, {"n": i}))
    history = bus.get_history(limit=10)
    assert [e.data["n"] for e in history] == [2, 3, 4]

    bus.clear_history()
    assert bus.get_history() == []


def test_history_filter_by_type():
    bus = EventBus()
    bus.emit(Event(EventType.SPIN_STARTED))
    bus.emit(Event(EventType.SPIN_COMPLETED))
    assert [e.type for e in bus.get_history(EventType.SPIN_COMPLETED)] == [EventType.SPIN_COMPLETED]

