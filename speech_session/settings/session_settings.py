from typing import Callable

from .settings_store import SettingsStore

LANGUAGE_KEY = "language"
SOUND_ON_KEY = "sound_on"


class SessionSettings:
    """The two persisted session settings: recognition language and sound cues.

    Reads fall back to the recognition service's default language and to
    sound cues off. Sound cues are on only when the store holds boolean true.
    Writes go straight to the store.
    """

    def __init__(self, store: SettingsStore, default_language: Callable[[], str]):
        self._store = store
        self._default_language = default_language

    @property
    def store(self) -> SettingsStore:
        return self._store

    @property
    def language(self) -> str:
        language = self._store.get(LANGUAGE_KEY)
        if language is None:
            return self._default_language()
        return language

    def set_language(self, language: str):
        self._store.set(LANGUAGE_KEY, language)

    @property
    def sound_on(self) -> bool:
        # Only a stored boolean true enables sound; "false" in a hand-edited file must not
        return self._store.get(SOUND_ON_KEY) is True

    def set_sound_on(self, sound_on: bool):
        self._store.set(SOUND_ON_KEY, sound_on)
