"""Client-side view state for the registry, dashboard and layout."""

from .dashboard import WeldDashboard, WeldParamsEditor
from .layout import LayoutController, LayoutState
from .notifications import Notifier, Severity, Toast
from .registry import RegistryView
from .storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from .theme import ThemeConfig, ThemeState, render_theme

__all__ = [
    "JsonFileStorage",
    "KeyValueStorage",
    "LayoutController",
    "LayoutState",
    "MemoryStorage",
    "Notifier",
    "RegistryView",
    "Severity",
    "ThemeConfig",
    "ThemeState",
    "Toast",
    "WeldDashboard",
    "WeldParamsEditor",
    "render_theme",
]
