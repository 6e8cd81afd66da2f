"""Subscriber contract and normalization of subscriber event mappings."""

from __future__ import annotations

from typing import Any
from typing import Iterator
from typing import Mapping
from typing import Protocol
from typing import Union
from typing import runtime_checkable

from dispatchlite.exceptions import SubscriberError
from dispatchlite.registry import Listener

HandlerRef = Union[Listener, str]
"""A listener callable, or the name of a method on the subscriber."""

SubscriptionSpec = Union[
    HandlerRef,
    tuple[HandlerRef, int],
    list[Union[HandlerRef, tuple[HandlerRef, int]]],
]
"""Value of one event name in a subscriber mapping."""


@runtime_checkable
class EventSubscriber(Protocol):
    """
    An object that declares a batch of listener bindings.

    The dispatcher reads the mapping once when the subscriber is added and once when it is
    removed; it keeps no reference to the subscriber itself.

    Examples:
        >>> class AuditSubscriber:
        ...     def get_subscribed_events(self):
        ...         return {
        ...             "order.placed": ("on_placed", 10),
        ...             "order.cancelled": ["on_cancelled", ("archive", -5)],
        ...         }
    """

    def get_subscribed_events(self) -> Mapping[str, SubscriptionSpec]:
        """
        Return the events this subscriber listens to.

        Must be free of side effects and return the same bindings on every call. Each value is
        a handler, a `(handler, priority)` tuple, or a list of those. Handlers may be callables
        or names of methods on the subscriber.
        """
        ...


def iter_subscriptions(
    subscriber: EventSubscriber, default_priority: int = 0
) -> Iterator[tuple[str, Listener, int]]:
    """
    Normalize a subscriber mapping into `(event_name, handler, priority)` triples.

    The whole mapping is validated before the first triple is yielded, so a malformed
    subscriber never results in a partial registration.

    Args:
        subscriber: Subscriber whose `get_subscribed_events()` is read once.
        default_priority: Priority for entries that do not specify one.

    Raises:
        SubscriberError: If the mapping contains an entry of an unsupported shape.
    """
    mapping = subscriber.get_subscribed_events()
    if not isinstance(mapping, Mapping):
        raise SubscriberError(
            f"{type(subscriber).__name__}.get_subscribed_events() must return a mapping, "
            f"got {type(mapping).__name__}."
        )

    triples: list[tuple[str, Listener, int]] = []
    for event_name, spec in mapping.items():
        if not isinstance(event_name, str):
            raise SubscriberError(
                f"Event names must be strings, got {type(event_name).__name__} "
                f"in {type(subscriber).__name__}."
            )
        items = spec if isinstance(spec, list) else [spec]
        for item in items:
            handler, priority = _normalize_item(subscriber, event_name, item, default_priority)
            triples.append((event_name, handler, priority))

    yield from triples


def _normalize_item(
    subscriber: Any, event_name: str, item: Any, default_priority: int
) -> tuple[Listener, int]:
    if isinstance(item, tuple):
        if len(item) == 2:
            ref, priority = item
        elif len(item) == 1:
            (ref,), priority = item, default_priority
        else:
            raise SubscriberError(
                f"Subscription for '{event_name}' must be (handler, priority), got {item!r}."
            )
    else:
        ref, priority = item, default_priority

    if isinstance(priority, bool) or not isinstance(priority, int):
        raise SubscriberError(
            f"Priority for '{event_name}' must be an int, got {type(priority).__name__}."
        )

    return _resolve_handler(subscriber, event_name, ref), priority


def _resolve_handler(subscriber: Any, event_name: str, ref: Any) -> Listener:
    if isinstance(ref, str):
        handler = getattr(subscriber, ref, None)
        if not callable(handler):
            raise SubscriberError(
                f"{type(subscriber).__name__} has no method '{ref}' to handle '{event_name}'."
            )
        return handler

    if not callable(ref):
        raise SubscriberError(
            f"Handler for '{event_name}' must be callable or a method name, got {ref!r}."
        )
    return ref
