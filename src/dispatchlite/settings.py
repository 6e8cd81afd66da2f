from __future__ import annotations

import threading
from dataclasses import dataclass

_GLOBAL_DISPATCHLITE_SETTINGS: DispatchliteSettings | None = None
_SETTINGS_LOCK = threading.RLock()


@dataclass(frozen=True)
class DispatchliteSettings:
    """Configuration settings for dispatchlite."""

    default_priority: int = 0
    """
    Priority given to listeners registered without an explicit priority.

    Applies to `add_listener` calls and to subscriber entries that only name a handler.
    """

    thread_safe: bool = True
    """
    Whether new listener registries guard their state with a re-entrant lock.

    Disable only when every dispatcher is confined to a single thread.
    """


def get_global_settings() -> DispatchliteSettings:
    """
    Get the global dispatchlite settings instance (thread-safe).

    If no global settings have been set, returns a default instance.
    """
    with _SETTINGS_LOCK:
        global _GLOBAL_DISPATCHLITE_SETTINGS
        if _GLOBAL_DISPATCHLITE_SETTINGS is None:
            _GLOBAL_DISPATCHLITE_SETTINGS = DispatchliteSettings()
        return _GLOBAL_DISPATCHLITE_SETTINGS


def set_global_settings(settings: DispatchliteSettings) -> None:
    """
    Set the global dispatchlite settings instance (thread-safe).

    Note: Settings are read when a registry or dispatcher is constructed. Instances created
    before the change keep the settings they were built with.

    Args:
        settings (DispatchliteSettings): Settings to set as global.
    """
    with _SETTINGS_LOCK:
        global _GLOBAL_DISPATCHLITE_SETTINGS
        _GLOBAL_DISPATCHLITE_SETTINGS = settings
