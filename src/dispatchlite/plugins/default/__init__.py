"""Default plugins shipped with dispatchlite."""

from dispatchlite.plugins.default.logging import LoggingPlugin

__all__ = [
    "LoggingPlugin",
]
