"""
Logging plugin reporting dispatch activity through Python's logging system.

Example:
    >>> import logging
    >>> from dispatchlite import EventDispatcher
    >>> from dispatchlite.plugins.default import LoggingPlugin
    >>>
    >>> dispatcher = EventDispatcher(plugins=[LoggingPlugin(level=logging.INFO)])
"""

import logging
from typing import Any

from dispatchlite.events import Event
from dispatchlite.plugins.hooks.markers import hook_impl

DEFAULT_LOGGER_NAME = "dispatchlite.dispatch"


class LoggingPlugin:
    """
    Plugin that logs the start, end and failures of every dispatch.

    Args:
        level: Level used for the start and end records. Listener errors are always logged
            at ERROR level.
        logger_name: Name of the logger to write to. Defaults to "dispatchlite.dispatch".
    """

    def __init__(self, level: int = logging.DEBUG, logger_name: str | None = None):
        self._level = level
        self._logger = logging.getLogger(logger_name or DEFAULT_LOGGER_NAME)

    @hook_impl
    def before_dispatch(self, event_name: str, event: Event, listener_count: int) -> None:
        self._logger.log(
            self._level,
            f"Dispatching '{event_name}' ({type(event).__name__}) to {listener_count} listener(s)",
        )

    @hook_impl
    def after_dispatch(
        self, event_name: str, event: Event, called: int, stopped: bool, duration: float
    ) -> None:
        suffix = " (propagation stopped)" if stopped else ""
        self._logger.log(
            self._level,
            f"Dispatched '{event_name}' to {called} listener(s) in {duration:.6f}s{suffix}",
        )

    @hook_impl
    def on_listener_error(
        self, event_name: str, event: Event, listener: Any, error: Exception
    ) -> None:
        name = getattr(listener, "__qualname__", None) or repr(listener)
        self._logger.error(
            f"Listener {name} failed while handling '{event_name}': {error}",
            exc_info=(type(error), error, error.__traceback__),
        )
