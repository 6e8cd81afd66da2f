"""Utility functions to manage the process-wide and per-dispatcher hook configuration."""

import logging
from inspect import isclass
from typing import Any
from typing import Iterable

from pluggy import PluginManager

from dispatchlite.exceptions import PluginError

from .hooks.markers import HOOK_NAMESPACE
from .hooks.specs import DispatchSpec

logger = logging.getLogger(__name__)

_PLUGIN_MANAGER: PluginManager | None = None


# region API


def register_hooks(*hooks: Any) -> None:
    """
    Register dispatch hook implementations for every dispatcher created afterwards.

    Dispatchers copy the global hooks when they are constructed, so already existing
    dispatchers are unaffected.
    """
    hook_manager = _get_global_plugin_manager()
    for hooks_collection in hooks:
        if not hook_manager.is_registered(hooks_collection):
            _ensure_instance(hooks_collection)
            hook_manager.register(hooks_collection)


def unregister_hooks(*hooks: Any) -> None:
    """Remove previously registered global hook implementations; unknown hooks are ignored."""
    hook_manager = _get_global_plugin_manager()
    for hooks_collection in hooks:
        if hook_manager.is_registered(hooks_collection):
            hook_manager.unregister(hooks_collection)


def create_hook_manager_with_plugins(plugins: Iterable[Any]) -> PluginManager:
    """
    Create a new hook manager with both global and dispatcher-specific plugins.

    Args:
        plugins: Additional hook implementations to register.

    Returns:
        A new PluginManager with global + dispatcher-specific hooks.
    """
    manager = _create_plugin_manager()

    global_manager = _get_global_plugin_manager()
    for plugin in global_manager.get_plugins():
        if not manager.is_registered(plugin):  # pragma: no branch
            manager.register(plugin)

    for plugin in plugins:
        if not manager.is_registered(plugin):
            _ensure_instance(plugin)
            manager.register(plugin)

    return manager


# region Helpers


def _ensure_instance(plugin: Any) -> None:
    if isclass(plugin):
        raise PluginError(
            "dispatchlite expects hooks to be registered as instances. "
            "Have you forgotten the `()` when registering a hook class?"
        )


def _initialize_plugin_system() -> PluginManager:
    """Initializes the global hook manager."""
    manager = _create_plugin_manager()
    global _PLUGIN_MANAGER
    _PLUGIN_MANAGER = manager
    return manager


def _get_global_plugin_manager() -> PluginManager:
    """Returns the initialized global plugin manager, creating it on first use."""
    plugin_manager = _PLUGIN_MANAGER
    if plugin_manager is None:
        plugin_manager = _initialize_plugin_system()
    return plugin_manager


def _create_plugin_manager() -> PluginManager:
    """Create a new PluginManager instance and register dispatchlite's hook specs."""
    manager = PluginManager(HOOK_NAMESPACE)
    manager.trace.root.setwriter(
        logger.debug if logger.getEffectiveLevel() == logging.DEBUG else None
    )
    manager.enable_tracing()
    manager.add_hookspecs(DispatchSpec)
    return manager
