import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from ..errors import SettingsStoreError
from .settings_store import SettingsStore

logger = logging.getLogger(__name__)


class JsonFileSettingsStore(SettingsStore):
    """Settings store persisted as a single JSON object on disk.

    The whole file is rewritten on every `set`, through a temporary file that
    replaces the original, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: Union[str, Path], **kwargs):
        self._path = Path(path)
        self._values = self._load()

    @staticmethod
    def name() -> str:
        return "json"

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict:
        if not self._path.exists():
            logger.debug(f"Settings file '{self._path}' does not exist, starting empty")
            return {}

        try:
            with open(self._path, "r", encoding="utf-8") as settings_file:
                values = json.load(settings_file)
        except (OSError, ValueError) as e:
            raise SettingsStoreError(f"Cannot read settings file '{self._path}': {e}") from e

        if not isinstance(values, dict):
            raise SettingsStoreError(f"Settings file '{self._path}' does not contain a JSON object")

        return values

    def _save(self, values: dict):
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as temp_file:
                json.dump(values, temp_file, indent=2, sort_keys=True)
            os.replace(temp_path, self._path)
        except (OSError, TypeError) as e:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise SettingsStoreError(f"Cannot write settings file '{self._path}': {e}") from e

    def get(self, key: str) -> Optional[Any]:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        values = dict(self._values)
        values[key] = value
        self._save(values)
        self._values = values
