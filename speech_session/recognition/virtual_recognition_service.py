"""VirtualRecognitionService: programmatic recognition engine.

This module provides an in-process recognition service whose results and
errors are injected by the application instead of coming from a microphone.
Useful for testing, demos, or driving a session from a non-audio source.
"""

import asyncio
import logging
from typing import Any, List, NamedTuple, Optional, Sequence

from ..events import RecognitionErrorEvent, RecognitionResultEvent, ServiceErrorEvent
from .recognition_service import RecognitionService, RecognitionType

logger = logging.getLogger(__name__)


class StartCall(NamedTuple):
    language: str
    recognition_type: RecognitionType
    prompt: Optional[str]


class VirtualRecognitionService(RecognitionService):
    """Recognition service driven by method calls.

    Args:
        supported_languages: Language codes reported as supported.
        default_language: Language reported as the service default.
        permission_granted: Outcome of `check_permissions`.
        initialization_error: Exception raised by `initialize`, if any.
        auto_activate: Whether `start` reports the service active right away.
            When False, call `set_active(True)` to simulate a late start.

    Example:
        service = VirtualRecognitionService(default_language="en_US")
        await service.initialize()

        service.start("en_US", RecognitionType.FREE)
        service.push_result("hello", is_final=False)
        service.push_result("hello world")
        service.stop()
    """

    DEFAULT_LANGUAGES = [
        "en_US",
        "en_GB",
        "de_DE",
        "es_ES",
        "fr_FR",
        "it_IT",
        "ko_KR",
        "pt_BR",
        "zh_CN",
    ]

    def __init__(
        self,
        supported_languages: Optional[Sequence[str]] = None,
        default_language: str = "en_US",
        permission_granted: bool = True,
        initialization_error: Optional[Exception] = None,
        auto_activate: bool = True,
        **kwargs,
    ):
        super().__init__()
        self._supported_languages = list(supported_languages or self.DEFAULT_LANGUAGES)
        self._default_language = default_language
        self._ready = False
        self._auto_activate = auto_activate

        self.permission_granted = permission_granted
        self.initialization_error = initialization_error

        self.start_calls: List[StartCall] = []
        self.pause_count = 0
        self.stop_count = 0

    @staticmethod
    def name() -> str:
        return "virtual"

    @property
    def supported_languages(self) -> List[str]:
        return list(self._supported_languages)

    @property
    def default_language(self) -> str:
        return self._default_language

    @property
    def ready(self) -> bool:
        return self._ready

    async def check_permissions(self) -> bool:
        await asyncio.sleep(0)
        return self.permission_granted

    async def initialize(self) -> None:
        await asyncio.sleep(0)

        if self.initialization_error is not None:
            raise self.initialization_error

        self._ready = True

    def start(
        self,
        language: str,
        recognition_type: RecognitionType,
        prompt: Optional[str] = None,
    ) -> None:
        self.start_calls.append(StartCall(language, recognition_type, prompt))

        if language not in self._supported_languages:
            logger.debug(f"Language '{language}' is not supported")
            self.raise_service_error(f"Language '{language}' is not supported")
            return

        if self._auto_activate:
            self._set_recognition_active(True)

    def pause(self) -> None:
        self.pause_count += 1
        self._set_recognition_active(False)

    def stop(self) -> None:
        self.stop_count += 1
        self._set_recognition_active(False)

    def set_active(self, active: bool):
        self._set_recognition_active(active)

    def push_result(self, text: str, is_final: bool = True):
        self.recognition_result.emit(RecognitionResultEvent(text=text, is_final=is_final))

    def raise_service_error(self, error: Any):
        self.service_error.emit(ServiceErrorEvent(error=error))

    def raise_recognition_error(self, error: Any = None):
        self.recognition_error.emit(RecognitionErrorEvent(error=error))
