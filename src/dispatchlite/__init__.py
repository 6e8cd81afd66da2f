"""Dispatchlite: In-process, synchronous event dispatch with prioritized listeners."""

__version__ = "0.1.0"

from . import settings
from .dispatcher import EventDispatcher
from .dispatcher import ImmutableEventDispatcher
from .events import Event
from .events import GenericEvent
from .exceptions import DispatchliteError
from .exceptions import ImmutableDispatcherError
from .exceptions import PluginError
from .exceptions import SubscriberError
from .plugins.manager import _initialize_plugin_system
from .registry import ListenerEntry
from .registry import ListenerRegistry
from .subscribers import EventSubscriber

# Initialize hooks system on module import
_initialize_plugin_system()

__all__ = [
    "DispatchliteError",
    "Event",
    "EventDispatcher",
    "EventSubscriber",
    "GenericEvent",
    "ImmutableDispatcherError",
    "ImmutableEventDispatcher",
    "ListenerEntry",
    "ListenerRegistry",
    "PluginError",
    "SubscriberError",
    "settings",
]
