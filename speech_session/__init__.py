from .config import SessionConfig
from .errors import InitializationError, PermissionCheckError, SessionError, SettingsStoreError
from .events import (
    EventChannel,
    RecognitionActiveStateChangedEvent,
    RecognitionErrorEvent,
    RecognitionResultEvent,
    ResultChangedEvent,
    ServiceErrorEvent,
    SessionEvent,
)
from .recognition import (
    RecognitionService,
    RecognitionServiceFactory,
    RecognitionType,
    VirtualRecognitionService,
)
from .session_controller import RecognitionSessionController, SessionState, StartResult
from .settings import (
    InMemorySettingsStore,
    JsonFileSettingsStore,
    SessionSettings,
    SettingsStore,
    SettingsStoreFactory,
)

__all__ = [
    "RecognitionSessionController",
    "SessionState",
    "StartResult",
    "SessionConfig",
    "SessionError",
    "InitializationError",
    "PermissionCheckError",
    "SettingsStoreError",
    "EventChannel",
    "SessionEvent",
    "RecognitionActiveStateChangedEvent",
    "RecognitionResultEvent",
    "ResultChangedEvent",
    "ServiceErrorEvent",
    "RecognitionErrorEvent",
    "RecognitionService",
    "RecognitionServiceFactory",
    "RecognitionType",
    "VirtualRecognitionService",
    "SettingsStore",
    "InMemorySettingsStore",
    "JsonFileSettingsStore",
    "SettingsStoreFactory",
    "SessionSettings",
]
