"""
Centralized exception classes for the dispatchlite library.

All dispatchlite-specific exceptions inherit from DispatchliteError for easy catching. Exceptions
raised by listeners are never wrapped and reach the caller of `dispatch` unchanged.
"""


class DispatchliteError(Exception):
    """Base exception for all dispatchlite errors."""


class SubscriberError(DispatchliteError):
    """Raised when a subscriber declares a malformed event mapping."""


class ImmutableDispatcherError(DispatchliteError):
    """Raised when a listener change is attempted through an immutable dispatcher."""


class PluginError(DispatchliteError, TypeError):
    """Raised when dispatch hooks are registered incorrectly."""
