from abc import ABC, abstractmethod
from enum import Enum, auto, unique
from typing import List, Optional

from ..events import EventChannel, RecognitionActiveStateChangedEvent


@unique
class RecognitionType(Enum):
    FREE = auto()
    PARTIAL = auto()
    SEARCH = auto()
    WEB_SEARCH = auto()


class RecognitionService(ABC):
    """Contract of a speech recognition engine driven by a session controller.

    `check_permissions` and `initialize` are coroutines. `start`, `pause` and
    `stop` return immediately; what happens afterwards is reported on the
    notification channels:

    - `active_state_changed`: `RecognitionActiveStateChangedEvent(active=...)`
    - `recognition_result`: `RecognitionResultEvent(text=..., is_final=...)`
    - `recognition_error`: `RecognitionErrorEvent(error=...)`
    - `service_error`: `ServiceErrorEvent(error=...)`
    """

    def __init__(self):
        self._recognition_active = False

        self.active_state_changed = EventChannel("active_state_changed")
        self.recognition_result = EventChannel("recognition_result")
        self.recognition_error = EventChannel("recognition_error")
        self.service_error = EventChannel("service_error")

    @staticmethod
    @abstractmethod
    def name() -> str:  # pragma: no cover
        pass

    @property
    @abstractmethod
    def supported_languages(self) -> List[str]:  # pragma: no cover
        pass

    @property
    @abstractmethod
    def default_language(self) -> str:  # pragma: no cover
        pass

    @property
    @abstractmethod
    def ready(self) -> bool:  # pragma: no cover
        pass

    @property
    def recognition_active(self) -> bool:
        return self._recognition_active

    @abstractmethod
    async def check_permissions(self) -> bool:  # pragma: no cover
        pass

    @abstractmethod
    async def initialize(self) -> None:  # pragma: no cover
        pass

    @abstractmethod
    def start(
        self,
        language: str,
        recognition_type: RecognitionType,
        prompt: Optional[str] = None,
    ) -> None:  # pragma: no cover
        pass

    @abstractmethod
    def stop(self) -> None:  # pragma: no cover
        pass

    def pause(self) -> None:
        self.stop()

    def _set_recognition_active(self, active: bool):
        if self._recognition_active == active:
            return

        self._recognition_active = active
        self.active_state_changed.emit(RecognitionActiveStateChangedEvent(active=active))
