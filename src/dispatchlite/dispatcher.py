"""Synchronous, priority-ordered event dispatch."""

from __future__ import annotations

import logging
import time
from typing import Any
from typing import Iterable
from typing import TypeVar
from typing import overload

from dispatchlite.events import Event
from dispatchlite.exceptions import ImmutableDispatcherError
from dispatchlite.plugins.manager import create_hook_manager_with_plugins
from dispatchlite.registry import Listener
from dispatchlite.registry import ListenerRegistry
from dispatchlite.settings import DispatchliteSettings
from dispatchlite.settings import get_global_settings
from dispatchlite.subscribers import EventSubscriber
from dispatchlite.subscribers import iter_subscriptions

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Event)


class EventDispatcher:
    """
    Dispatches events to registered listeners with prioritization.

    Each dispatcher owns exactly one `ListenerRegistry`. Listeners run synchronously in the
    caller's thread, highest priority first and in registration order among equal priorities.
    Exceptions raised by listeners propagate to the caller of `dispatch` and abort the
    remaining listeners.

    Args:
        plugins: Hook implementations notified about this dispatcher's dispatches, in addition
            to the globally registered hooks.
        settings: Settings to use instead of the global settings.

    Examples:
        >>> dispatcher = EventDispatcher()
        >>> calls = []
        >>> dispatcher.add_listener("foo", lambda event: calls.append("low"))
        >>> dispatcher.add_listener("foo", lambda event: calls.append("high"), priority=10)
        >>> _ = dispatcher.dispatch(Event(), "foo")
        >>> calls
        ['high', 'low']
    """

    def __init__(
        self,
        plugins: Iterable[Any] | None = None,
        settings: DispatchliteSettings | None = None,
    ) -> None:
        self._settings = settings or get_global_settings()
        self._registry = ListenerRegistry(self._settings)
        self._hooks = create_hook_manager_with_plugins(plugins or [])

    # region Registration

    def add_listener(self, event_name: str, handler: Listener, priority: int | None = None) -> None:
        """
        Registers a listener for an event.

        The listener takes part in the next dispatch of `event_name` onward; a dispatch that is
        already running is unaffected.

        Args:
            event_name: Name of the event to listen for.
            handler: Callable receiving the event.
            priority: Order of execution - higher values go first. Defaults to the configured
                default priority.
        """
        if priority is None:
            priority = self._settings.default_priority
        self._registry.add(event_name, handler, priority)

    def remove_listener(self, event_name: str | None, handler: Listener) -> None:
        """
        Unregisters every registration of a listener for an event.

        Args:
            event_name: Name of the event, or None to remove the listener from all events.
            handler: The listener to remove. Listeners that are not registered are ignored.
        """
        self._registry.remove(event_name, handler)

    def add_subscriber(self, subscriber: EventSubscriber) -> None:
        """
        Registers every listener declared by a subscriber.

        Listeners are added in the order the subscriber's mapping enumerates them.

        Raises:
            SubscriberError: If the subscriber's mapping is malformed. Nothing is registered.
        """
        subscriptions = list(iter_subscriptions(subscriber, self._settings.default_priority))
        for event_name, handler, priority in subscriptions:
            self.add_listener(event_name, handler, priority)
        logger.debug(
            f"Added subscriber {type(subscriber).__name__} ({len(subscriptions)} listener(s))"
        )

    def remove_subscriber(self, subscriber: EventSubscriber) -> None:
        """
        Unregisters every listener declared by a subscriber, whatever their current priority.

        Raises:
            SubscriberError: If the subscriber's mapping is malformed. Nothing is removed.
        """
        subscriptions = list(iter_subscriptions(subscriber, self._settings.default_priority))
        for event_name, handler, _ in subscriptions:
            self.remove_listener(event_name, handler)
        logger.debug(f"Removed subscriber {type(subscriber).__name__}")

    # region Dispatch

    def dispatch(self, event: E, event_name: str) -> E:
        """
        Dispatches an event to all listeners of `event_name`.

        The ordered listeners are captured once when the dispatch starts. Listeners added or
        removed while it runs only affect later dispatches.

        Args:
            event: The event passed to each listener.
            event_name: Name of the event to raise.

        Returns:
            The same event instance, as mutated by the listeners.
        """
        listeners = self._registry.get_listeners(event_name)
        if not listeners:
            return event

        hook = self._hooks.hook
        hook.before_dispatch(event_name=event_name, event=event, listener_count=len(listeners))

        start = time.perf_counter()
        called = 0
        for listener in listeners:
            called += 1
            try:
                listener(event)
            except Exception as e:
                try:
                    hook.on_listener_error(
                        event_name=event_name, event=event, listener=listener, error=e
                    )
                except Exception:
                    logger.exception(f"on_listener_error hook failed while handling '{event_name}'")
                raise
            if event.propagation_stopped:
                break

        hook.after_dispatch(
            event_name=event_name,
            event=event,
            called=called,
            stopped=event.propagation_stopped,
            duration=time.perf_counter() - start,
        )
        return event

    # region Introspection

    @overload
    def get_listeners(self, event_name: str) -> tuple[Listener, ...]: ...

    @overload
    def get_listeners(self, event_name: None = None) -> dict[str, tuple[Listener, ...]]: ...

    def get_listeners(
        self, event_name: str | None = None
    ) -> tuple[Listener, ...] | dict[str, tuple[Listener, ...]]:
        """Listeners of `event_name` in invocation order, or of every event if None."""
        return self._registry.get_listeners(event_name)

    def has_listeners(self, event_name: str | None = None) -> bool:
        """Whether `event_name` (or, if None, any event) has at least one listener."""
        return self._registry.has_listeners(event_name)

    def get_listener_priority(self, event_name: str, handler: Listener) -> int | None:
        """Priority of `handler` for `event_name`, or None if it is not registered there."""
        return self._registry.get_listener_priority(event_name, handler)


class ImmutableEventDispatcher:
    """
    Read-only proxy for an `EventDispatcher`.

    Dispatching and introspection are forwarded to the wrapped dispatcher. Any attempt to add
    or remove listeners or subscribers raises `ImmutableDispatcherError`.
    """

    def __init__(self, dispatcher: EventDispatcher) -> None:
        self._dispatcher = dispatcher

    def dispatch(self, event: E, event_name: str) -> E:
        """Dispatch through the wrapped dispatcher."""
        return self._dispatcher.dispatch(event, event_name)

    def add_listener(self, event_name: str, handler: Listener, priority: int | None = None) -> None:
        """Always raises `ImmutableDispatcherError`."""
        raise ImmutableDispatcherError("Unmodifiable event dispatchers must not be modified.")

    def remove_listener(self, event_name: str | None, handler: Listener) -> None:
        """Always raises `ImmutableDispatcherError`."""
        raise ImmutableDispatcherError("Unmodifiable event dispatchers must not be modified.")

    def add_subscriber(self, subscriber: EventSubscriber) -> None:
        """Always raises `ImmutableDispatcherError`."""
        raise ImmutableDispatcherError("Unmodifiable event dispatchers must not be modified.")

    def remove_subscriber(self, subscriber: EventSubscriber) -> None:
        """Always raises `ImmutableDispatcherError`."""
        raise ImmutableDispatcherError("Unmodifiable event dispatchers must not be modified.")

    @overload
    def get_listeners(self, event_name: str) -> tuple[Listener, ...]: ...

    @overload
    def get_listeners(self, event_name: None = None) -> dict[str, tuple[Listener, ...]]: ...

    def get_listeners(
        self, event_name: str | None = None
    ) -> tuple[Listener, ...] | dict[str, tuple[Listener, ...]]:
        """Listeners of `event_name` in invocation order, or of every event if None."""
        return self._dispatcher.get_listeners(event_name)

    def has_listeners(self, event_name: str | None = None) -> bool:
        """Whether `event_name` (or, if None, any event) has at least one listener."""
        return self._dispatcher.has_listeners(event_name)

    def get_listener_priority(self, event_name: str, handler: Listener) -> int | None:
        """Priority of `handler` for `event_name`, or None if it is not registered there."""
        return self._dispatcher.get_listener_priority(event_name, handler)
