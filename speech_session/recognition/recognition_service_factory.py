import logging
import threading
from typing import List, Type

from .recognition_service import RecognitionService
from .virtual_recognition_service import VirtualRecognitionService

logger = logging.getLogger(__name__)


class RecognitionServiceFactory:
    _services = {}
    _lock = threading.Lock()

    @classmethod
    def create(cls, service_name: str, **kwargs) -> RecognitionService:
        logger.info(f"Creating recognition service for '{service_name}'")

        with cls._lock:
            if service_name in cls._services:
                return cls._services[service_name](**kwargs)

        raise RuntimeError(f"Engine '{service_name}' is not available")

    @classmethod
    def register_service(cls, name: str, service_class: Type[RecognitionService]):
        with cls._lock:
            cls._services[name] = service_class

    @classmethod
    def unregister_service(cls, name: str):
        with cls._lock:
            if name in cls._services:
                del cls._services[name]
            else:
                raise KeyError(f"Recognition service not found: {name}")

    @classmethod
    def list_services(cls) -> List[str]:
        with cls._lock:
            return list(cls._services.keys())


# Register available services (best-effort imports)
RecognitionServiceFactory.register_service(VirtualRecognitionService.name(), VirtualRecognitionService)

try:
    from .google_recognition_service import GoogleCloudRecognitionService

    RecognitionServiceFactory.register_service(GoogleCloudRecognitionService.name(), GoogleCloudRecognitionService)
except ModuleNotFoundError:
    pass
