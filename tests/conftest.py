"""Conftest for all pytest configuration - fixtures and global state isolation."""

import pytest

from dispatchlite.plugins.manager import _initialize_plugin_system
from dispatchlite.settings import DispatchliteSettings
from dispatchlite.settings import set_global_settings


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Restore default settings and an empty global hook manager around every test."""
    set_global_settings(DispatchliteSettings())
    _initialize_plugin_system()
    yield
    set_global_settings(DispatchliteSettings())
    _initialize_plugin_system()
