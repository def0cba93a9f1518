"""Service layer helpers (settings and plugin storage)."""

from .settings import Settings, SettingsStore
from .storage import PluginStorage

__all__ = [
    "PluginStorage",
    "Settings",
    "SettingsStore",
]
