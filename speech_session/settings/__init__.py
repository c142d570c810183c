"""Persisted session settings.

`SettingsStore` is the key-value contract, `SettingsStoreFactory` creates the
registered stores by name, and `SessionSettings` narrows a store to the two
keys a recognition session uses.
"""

from .json_settings_store import JsonFileSettingsStore
from .session_settings import LANGUAGE_KEY, SOUND_ON_KEY, SessionSettings
from .settings_store import InMemorySettingsStore, SettingsStore
from .settings_store_factory import SettingsStoreFactory

__all__ = [
    "SettingsStore",
    "InMemorySettingsStore",
    "JsonFileSettingsStore",
    "SettingsStoreFactory",
    "SessionSettings",
    "LANGUAGE_KEY",
    "SOUND_ON_KEY",
]
