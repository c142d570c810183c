import logging
import threading
from typing import List, Type

from .json_settings_store import JsonFileSettingsStore
from .settings_store import InMemorySettingsStore, SettingsStore

logger = logging.getLogger(__name__)


class SettingsStoreFactory:
    _stores = {}
    _lock = threading.Lock()

    @classmethod
    def create(cls, store_name: str, **kwargs) -> SettingsStore:
        logger.info(f"Creating settings store for '{store_name}'")

        with cls._lock:
            if store_name in cls._stores:
                return cls._stores[store_name](**kwargs)

        raise RuntimeError(f"Settings store '{store_name}' is not available")

    @classmethod
    def register_store(cls, name: str, store_class: Type[SettingsStore]):
        with cls._lock:
            cls._stores[name] = store_class

    @classmethod
    def unregister_store(cls, name: str):
        with cls._lock:
            if name in cls._stores:
                del cls._stores[name]
            else:
                raise KeyError(f"Settings store not found: {name}")

    @classmethod
    def list_stores(cls) -> List[str]:
        with cls._lock:
            return list(cls._stores.keys())


# Register built-in stores
SettingsStoreFactory.register_store(InMemorySettingsStore.name(), InMemorySettingsStore)
SettingsStoreFactory.register_store(JsonFileSettingsStore.name(), JsonFileSettingsStore)
