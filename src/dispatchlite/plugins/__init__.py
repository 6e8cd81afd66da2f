from dispatchlite.plugins.default import LoggingPlugin

from .hooks.markers import hook_impl
from .manager import register_hooks

__all__ = [
    "hook_impl",
    "register_hooks",
    "LoggingPlugin",
]
