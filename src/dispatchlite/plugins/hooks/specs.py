"""Hook specifications for dispatchlite dispatch lifecycle events."""

from typing import Any

from dispatchlite.events import Event
from dispatchlite.plugins.hooks.markers import hook_spec


class DispatchSpec:
    """Hook specifications for a single `EventDispatcher.dispatch` call."""

    @hook_spec
    def before_dispatch(self, event_name: str, event: Event, listener_count: int) -> None:
        """
        Called before the first listener of a dispatch is invoked.

        Not called when no listener is registered for `event_name`.

        Args:
            event_name: Name the event is dispatched under.
            event: The event about to be passed to listeners.
            listener_count: Number of listeners in the ordered snapshot.
        """

    @hook_spec
    def after_dispatch(
        self,
        event_name: str,
        event: Event,
        called: int,
        stopped: bool,
        duration: float,
    ) -> None:
        """
        Called after a dispatch completes without a listener raising.

        Args:
            event_name: Name the event was dispatched under.
            event: The event, as left by the listeners.
            called: Number of listeners that were invoked.
            stopped: True if a listener stopped propagation.
            duration: Time taken to run the listeners in seconds.
        """

    @hook_spec
    def on_listener_error(
        self,
        event_name: str,
        event: Event,
        listener: Any,
        error: Exception,
    ) -> None:
        """
        Called when a listener raises, right before the exception propagates to the caller.

        Implementations cannot suppress the exception.

        Args:
            event_name: Name the event was dispatched under.
            event: The event passed to the failing listener.
            listener: The listener that raised.
            error: The exception that was raised.
        """
