import logging
import threading
from abc import ABC
from typing import Callable, List
from uuid import UUID, uuid4

logger = logging.getLogger(__name__)


class SessionEvent(ABC):
    def __init__(self, **kwargs):
        if self.__class__ == SessionEvent:
            raise TypeError('SessionEvent is an abstract class and cannot be instantiated directly')

        self._id = uuid4()

        for k, v in kwargs.items():
            if not hasattr(self, k):
                setattr(self, k, v)
            else:
                raise AttributeError(f'{self.__class__.__name__} already has attribute {k}')

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @property
    def id(self) -> UUID:
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return (self.__dict__ == other.__dict__)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({self.__dict__})'

    def get(self, key: str, default=None):
        return self.__dict__.get(key, default)

    def __getitem__(self, key: str):
        return self.__dict__[key]


class RecognitionActiveStateChangedEvent(SessionEvent):
    pass


class RecognitionResultEvent(SessionEvent):
    pass


class ResultChangedEvent(SessionEvent):
    pass


class ServiceErrorEvent(SessionEvent):
    pass


class RecognitionErrorEvent(SessionEvent):
    pass


EventCallback = Callable[[SessionEvent], None]


class EventChannel:
    """Multicast notification channel.

    Observers are called synchronously, in registration order, from the thread
    that emits the event. An exception raised by one observer is logged and
    does not prevent the remaining observers from being notified.
    """

    def __init__(self, name: str):
        self._name = name
        self._callbacks: List[EventCallback] = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    def subscribe(self, callback: EventCallback) -> Callable[[], None]:
        """Register `callback` and return a function that unregisters it."""
        with self._lock:
            self._callbacks.append(callback)

        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: EventCallback):
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def emit(self, event: SessionEvent):
        # Snapshot so observers may (un)subscribe while being notified
        with self._lock:
            callbacks = list(self._callbacks)

        for callback in callbacks:
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Error in '{self._name}' observer: {str(e)}")
