import asyncio
import logging
from enum import Enum, auto, unique
from typing import Callable, List, Optional

from .config import SessionConfig
from .errors import InitializationError, PermissionCheckError
from .events import EventChannel, ResultChangedEvent, SessionEvent, ServiceErrorEvent
from .recognition import RecognitionService, RecognitionServiceFactory
from .settings import SessionSettings, SettingsStore, SettingsStoreFactory

logger = logging.getLogger(__name__)


@unique
class SessionState(Enum):
    UNINITIALIZED = auto()
    INITIALIZING = auto()
    READY = auto()
    ACTIVE = auto()
    STOPPED_LOCKED = auto()


@unique
class StartResult(Enum):
    STARTED = auto()
    NOT_READY = auto()
    STOPPED_LOCKED = auto()
    EMPTY_TEXT = auto()
    SOUND_OFF = auto()

    @property
    def accepted(self) -> bool:
        return self is StartResult.STARTED


class RecognitionSessionController:
    """Single recognition session on top of a RecognitionService.

    The controller must be driven from one thread or event loop. Only
    `initialize` and `check_permissions` are coroutines; every other operation
    returns immediately and its outcome is reported on the notification
    channels:

    - `result_changed`: `ResultChangedEvent(result=...)`
    - `active_state_changed`: relayed from the service
    - `service_error`: relayed from the service, plus failures of the
      start/pause/stop requests themselves
    - `recognition_error`: relayed from the service

    After `stop()` the session is locked: `start()` is refused until `clear()`
    runs. `pause()` does not lock.
    """

    def __init__(
        self,
        service: RecognitionService,
        settings_store: SettingsStore,
        config: Optional[SessionConfig] = None,
    ):
        self._config = config if config else SessionConfig()
        self._service = service
        self._settings = SessionSettings(settings_store, lambda: self._service.default_language)

        self._phase = SessionState.UNINITIALIZED
        self._initialization: Optional[asyncio.Future] = None
        self._initialization_waiters = 0

        self._language: Optional[str] = None
        self._sound_on = False
        self._final_results: List[str] = []
        self._partial_result = ""

        self.result_changed = EventChannel("result_changed")
        self.active_state_changed = EventChannel("active_state_changed")
        self.service_error = EventChannel("service_error")
        self.recognition_error = EventChannel("recognition_error")

        self._unsubscribers: List[Callable[[], None]] = [
            service.active_state_changed.subscribe(self._on_active_state_changed),
            service.recognition_error.subscribe(self._on_recognition_error),
            service.service_error.subscribe(self._on_service_error),
            service.recognition_result.subscribe(self._on_recognition_result),
        ]

    @classmethod
    def from_config(cls, config: Optional[SessionConfig] = None, **service_kwargs) -> "RecognitionSessionController":
        config = config if config else SessionConfig()

        service = RecognitionServiceFactory.create(config.recognition_engine, **service_kwargs)

        store_kwargs = {}
        if config.settings_path is not None:
            store_kwargs["path"] = config.settings_path
        settings_store = SettingsStoreFactory.create(config.settings_store, **store_kwargs)

        return cls(service, settings_store, config)

    # Properties

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def service(self) -> RecognitionService:
        return self._service

    @property
    def state(self) -> SessionState:
        if self._phase is SessionState.READY and self._service.recognition_active:
            return SessionState.ACTIVE
        return self._phase

    @property
    def ready(self) -> bool:
        return self._phase in (SessionState.READY, SessionState.STOPPED_LOCKED)

    @property
    def recognition_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    @property
    def stopped_locked(self) -> bool:
        return self._phase is SessionState.STOPPED_LOCKED

    @property
    def supported_languages(self) -> List[str]:
        return self._service.supported_languages

    @property
    def language(self) -> Optional[str]:
        return self._language

    @property
    def sound_on(self) -> bool:
        return self._sound_on

    @property
    def result(self) -> str:
        parts = list(self._final_results)
        if self._partial_result:
            parts.append(self._partial_result)
        return " ".join(parts)

    # Initialization

    async def check_permissions(self) -> bool:
        try:
            granted = await self._service.check_permissions()
        except Exception as e:
            logger.error(f"Permission check failed: {e}")
            raise PermissionCheckError(f"Permission check failed: {e}") from e

        if not granted:
            logger.info("Recognition permissions denied")

        return bool(granted)

    async def initialize(self) -> None:
        if self.ready:
            return

        # Concurrent callers share the attempt in flight. A cancelled caller
        # abandons the attempt only when nobody else is waiting for it.
        if self._initialization is None:
            self._initialization = asyncio.ensure_future(self._initialize())
        initialization = self._initialization

        self._initialization_waiters += 1
        try:
            await asyncio.shield(initialization)
        except asyncio.CancelledError:
            if self._initialization_waiters == 1 and not initialization.done():
                initialization.cancel()
                await asyncio.wait([initialization])
            raise
        finally:
            self._initialization_waiters -= 1
            if self._initialization is initialization and initialization.done():
                self._initialization = None

    async def _initialize(self):
        self._phase = SessionState.INITIALIZING
        logger.info(f"Initializing recognition service '{self._service.name()}'")

        try:
            await self._service.initialize()
        except asyncio.CancelledError:
            self._phase = SessionState.UNINITIALIZED
            raise
        except Exception as e:
            self._phase = SessionState.UNINITIALIZED
            logger.error(f"Recognition service failed to initialize: {e}")
            raise InitializationError(f"Recognition service failed to initialize: {e}") from e

        self._restore_state()
        self._phase = SessionState.READY
        logger.info("Recognition session ready")

    def _restore_state(self):
        self._language = self._settings.language
        self._sound_on = self._settings.sound_on
        logger.debug(f"Restored settings: language={self._language}, sound_on={self._sound_on}")

    # Settings

    def set_language(self, language: str):
        self._settings.set_language(language)
        self._language = language

    def set_sound_on(self, sound_on: bool):
        self._settings.set_sound_on(sound_on)
        self._sound_on = sound_on

    # Recognition lifecycle

    def _check_start(self, text: Optional[str]) -> Optional[StartResult]:
        state = self.state

        if state in (SessionState.UNINITIALIZED, SessionState.INITIALIZING):
            return StartResult.NOT_READY

        if state is SessionState.STOPPED_LOCKED:
            return StartResult.STOPPED_LOCKED

        if text is not None and self._config.reject_empty_text and not text.strip():
            return StartResult.EMPTY_TEXT

        if self._config.require_sound_on and not self._sound_on:
            return StartResult.SOUND_OFF

        return None

    def start(self, text: Optional[str] = None) -> StartResult:
        rejection = self._check_start(text)
        if rejection is not None:
            logger.debug(f"Start ignored: {rejection.name}")
            return rejection

        logger.info(f"Starting recognition in '{self._language}'")
        self._forward(
            "start",
            lambda: self._service.start(self._language, self._config.recognition_type, prompt=text),
        )
        return StartResult.STARTED

    def pause(self):
        if not self.ready:
            logger.debug("Pause ignored: session not ready")
            return

        logger.info("Pausing recognition")
        self._forward("pause", self._service.pause)

    def stop(self):
        if not self.ready:
            logger.debug("Stop ignored: session not ready")
            return

        logger.info("Stopping recognition")
        self._forward("stop", self._service.stop)
        self._phase = SessionState.STOPPED_LOCKED

    def clear(self):
        if not self.ready:
            logger.debug("Clear ignored: session not ready")
            return

        self._final_results = []
        self._partial_result = ""
        self._phase = SessionState.READY

        self.result_changed.emit(ResultChangedEvent(result=self.result))

    def restart(self, text: Optional[str] = None) -> StartResult:
        self.clear()
        return self.start(text)

    def close(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _forward(self, operation: str, call: Callable[[], None]):
        try:
            call()
        except Exception as e:
            logger.error(f"Recognition service failed to {operation}: {e}")
            self.service_error.emit(ServiceErrorEvent(error=e))

    # Service notifications

    def _on_active_state_changed(self, event: SessionEvent):
        logger.debug(f"Recognition active state changed: {event}")
        self.active_state_changed.emit(event)

    def _on_recognition_error(self, event: SessionEvent):
        logger.debug(f"Recognition error: {event}")
        self.recognition_error.emit(event)

    def _on_service_error(self, event: SessionEvent):
        logger.debug(f"Service error: {event}")
        self.service_error.emit(event)

    def _on_recognition_result(self, event: SessionEvent):
        text = event.get("text") or ""

        if event.get("is_final", True):
            if text:
                self._final_results.append(text)
            self._partial_result = ""
        else:
            self._partial_result = text

        self.result_changed.emit(ResultChangedEvent(result=self.result))
