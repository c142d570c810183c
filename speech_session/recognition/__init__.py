"""Recognition service package public API.

`RecognitionService` is the contract a session controller drives, and
`RecognitionServiceFactory` creates registered services by name:

  from speech_session.recognition import RecognitionServiceFactory

The Google Cloud service is registered only when its client libraries are
installed.
"""

from .recognition_service import RecognitionService, RecognitionType
from .recognition_service_factory import RecognitionServiceFactory
from .virtual_recognition_service import VirtualRecognitionService

__all__ = [
    "RecognitionService",
    "RecognitionType",
    "RecognitionServiceFactory",
    "VirtualRecognitionService",
]
