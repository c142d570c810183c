from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class SettingsStore(ABC):  # pragma: no cover
    """Persistent key-value storage for user settings.

    `set` is write-through: a value written is visible to the next `get` in the
    same process. Values are not validated and missing keys return None.
    """

    @staticmethod
    @abstractmethod
    def name() -> str:
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        pass


class InMemorySettingsStore(SettingsStore):
    def __init__(self, initial_values: Optional[Dict[str, Any]] = None, **kwargs):
        self._values = dict(initial_values or {})

    @staticmethod
    def name() -> str:
        return "memory"

    def get(self, key: str) -> Optional[Any]:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
