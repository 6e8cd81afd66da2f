"""Unit tests for event payloads."""

from dataclasses import dataclass

import pytest

from dispatchlite import Event
from dispatchlite import GenericEvent


class TestEvent:
    """Tests for the base Event."""

    def test_propagation_not_stopped_by_default(self) -> None:
        """New events propagate."""
        assert Event().propagation_stopped is False

    def test_stop_propagation(self) -> None:
        """stop_propagation() sets the flag permanently."""
        event = Event()
        event.stop_propagation()
        event.stop_propagation()
        assert event.propagation_stopped is True

    def test_propagation_flag_is_read_only(self) -> None:
        """The flag can only be set through stop_propagation()."""
        event = Event()
        with pytest.raises(AttributeError):
            event.propagation_stopped = True  # type: ignore[misc]

    def test_subclass_keeps_contract(self) -> None:
        """Subclasses add fields while keeping the propagation flag."""

        class OrderPlaced(Event):
            def __init__(self, order_id: int) -> None:
                super().__init__()
                self.order_id = order_id

        event = OrderPlaced(7)
        event.stop_propagation()
        assert event.order_id == 7
        assert event.propagation_stopped

    def test_dataclass_subclass_keeps_contract(self) -> None:
        """Dataclass subclasses start unstopped without calling the base initializer."""

        @dataclass
        class OrderPlaced(Event):
            order_id: int

        event = OrderPlaced(7)
        assert event.propagation_stopped is False
        event.stop_propagation()
        assert event.propagation_stopped is True
        assert OrderPlaced(8).propagation_stopped is False


class TestGenericEvent:
    """Tests for GenericEvent."""

    def test_subject_and_arguments(self) -> None:
        """Subject and arguments are stored as given."""
        subject = object()
        event = GenericEvent(subject, {"name": "ada"})
        assert event.subject is subject
        assert event.arguments == {"name": "ada"}

    def test_defaults(self) -> None:
        """Without arguments the event is empty."""
        event = GenericEvent()
        assert event.subject is None
        assert len(event) == 0
        assert not event.propagation_stopped

    def test_arguments_are_copied(self) -> None:
        """The caller's mapping is not mutated by listeners."""
        source = {"a": 1}
        event = GenericEvent(arguments=source)
        event["a"] = 2
        assert source == {"a": 1}

    def test_mapping_access(self) -> None:
        """Arguments support item access, membership, deletion and iteration."""
        event = GenericEvent(arguments={"a": 1})
        event["b"] = 2
        assert event["a"] == 1
        assert "b" in event
        assert list(event) == ["a", "b"]
        del event["a"]
        del event["missing"]
        assert "a" not in event
        assert len(event) == 1

    def test_get_missing_argument_raises(self) -> None:
        """Missing arguments raise KeyError."""
        event = GenericEvent()
        with pytest.raises(KeyError, match="missing"):
            event.get_argument("missing")
        with pytest.raises(KeyError):
            event["missing"]

    def test_setters_are_chainable(self) -> None:
        """set_argument and set_arguments return the event."""
        event = GenericEvent()
        assert event.set_argument("a", 1).set_arguments({"b": 2}) is event
        assert event.arguments == {"b": 2}
        assert event.has_argument("b")
        assert not event.has_argument("a")
