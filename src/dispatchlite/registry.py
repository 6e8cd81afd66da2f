"""Per-event-name listener storage with lazily cached priority ordering."""

from __future__ import annotations

import contextlib
import inspect
import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any
from typing import Callable
from typing import ContextManager
from typing import overload

from dispatchlite.settings import DispatchliteSettings
from dispatchlite.settings import get_global_settings

logger = logging.getLogger(__name__)

Listener = Callable[[Any], Any]
"""A unary callable receiving the dispatched event. Its return value is ignored."""


@dataclass(frozen=True)
class ListenerEntry:
    """A single registration of a listener for one event name."""

    handler: Listener
    """Callable invoked with the event."""

    priority: int
    """Higher priorities are invoked first."""

    sequence: int
    """Registration counter of the owning registry; breaks ties between equal priorities."""


class ListenerRegistry:
    """
    Registry of listeners keyed by event name.

    The raw per-name entry lists are the source of truth and always keep registration order.
    Priority-sorted views are derived from them on demand, memoized per name, and discarded
    whenever that name's entries change.

    Handlers are matched by identity. Bound methods match when they bind the same function to
    the same instance, since each attribute access creates a new method object.
    """

    def __init__(self, settings: DispatchliteSettings | None = None) -> None:
        settings = settings or get_global_settings()
        self._entries: dict[str, list[ListenerEntry]] = {}
        self._sorted: dict[str, tuple[Listener, ...]] = {}
        self._sequence = itertools.count()
        self._lock: ContextManager[Any] = (
            threading.RLock() if settings.thread_safe else contextlib.nullcontext()
        )

    def add(self, event_name: str, handler: Listener, priority: int = 0) -> ListenerEntry:
        """
        Register `handler` for `event_name`.

        Registering the same handler again creates a second, independent entry.

        Args:
            event_name: Name of the event to listen for (case sensitive).
            handler: Callable invoked with the event.
            priority: Order of execution; higher values go first.

        Returns:
            The created entry.
        """
        with self._lock:
            entry = ListenerEntry(handler, priority, next(self._sequence))
            self._entries.setdefault(event_name, []).append(entry)
            self._sorted.pop(event_name, None)

        logger.debug(f"Added listener {_describe(handler)} to '{event_name}' (priority {priority})")
        return entry

    def remove(self, event_name: str | None, handler: Listener) -> None:
        """
        Remove every entry of `handler` for `event_name`.

        Args:
            event_name: Event name to remove the handler from, or None for all event names.
            handler: The handler to remove. Unknown handlers are ignored.
        """
        with self._lock:
            names = list(self._entries) if event_name is None else [event_name]
            for name in names:
                entries = self._entries.get(name)
                if not entries:
                    continue

                kept = [entry for entry in entries if not _same_handler(entry.handler, handler)]
                if len(kept) == len(entries):
                    continue

                if kept:
                    self._entries[name] = kept
                else:
                    del self._entries[name]
                self._sorted.pop(name, None)
                logger.debug(
                    f"Removed {len(entries) - len(kept)} registration(s) of "
                    f"{_describe(handler)} from '{name}'"
                )

    @overload
    def get_listeners(self, event_name: str) -> tuple[Listener, ...]: ...

    @overload
    def get_listeners(self, event_name: None = None) -> dict[str, tuple[Listener, ...]]: ...

    def get_listeners(
        self, event_name: str | None = None
    ) -> tuple[Listener, ...] | dict[str, tuple[Listener, ...]]:
        """
        Get listeners in invocation order.

        Args:
            event_name: Event name to look up. If None, all event names are returned.

        Returns:
            The ordered handlers for `event_name` (empty for unknown names), or a dict mapping
            every event name with listeners to its ordered handlers.
        """
        with self._lock:
            if event_name is not None:
                return self._sorted_listeners(event_name)
            return {name: self._sorted_listeners(name) for name in self._entries}

    def has_listeners(self, event_name: str | None = None) -> bool:
        """Whether `event_name` (or, if None, any event) has at least one listener."""
        with self._lock:
            if event_name is None:
                return any(self._entries.values())
            return bool(self._entries.get(event_name))

    def get_listener_priority(self, event_name: str, handler: Listener) -> int | None:
        """
        Get the priority `handler` was registered with for `event_name`.

        If the handler is registered several times, the earliest registration wins.

        Returns:
            The priority, or None if the handler is not registered for `event_name`.
        """
        with self._lock:
            for entry in self._entries.get(event_name, ()):
                if _same_handler(entry.handler, handler):
                    return entry.priority
        return None

    def _sorted_listeners(self, event_name: str) -> tuple[Listener, ...]:
        cached = self._sorted.get(event_name)
        if cached is not None:
            return cached

        entries = self._entries.get(event_name)
        if not entries:
            return ()

        # Stable sort; reverse=True keeps equal priorities in registration order.
        ordered = sorted(entries, key=lambda entry: entry.priority, reverse=True)
        listeners = tuple(entry.handler for entry in ordered)
        self._sorted[event_name] = listeners
        return listeners


def _describe(handler: Any) -> str:
    """Readable name for a handler in log messages."""
    name = getattr(handler, "__qualname__", None) or getattr(handler, "__name__", None)
    return name or repr(handler)


def _same_handler(registered: Any, handler: Any) -> bool:
    """Identity match; bound methods match when bound to the same instance and function."""
    if inspect.ismethod(registered) and inspect.ismethod(handler):
        return registered.__self__ is handler.__self__ and registered.__func__ is handler.__func__
    return registered is handler
