"""
Configuration classes for speech_session components.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .recognition.recognition_service import RecognitionType


@dataclass
class SessionConfig:
    """
    Configuration for the RecognitionSessionController class.

    Attributes:
        recognition_engine: Recognition service factory name.
            Supported values: 'virtual', 'google' (needs google-cloud-speech)
            Default: 'virtual'

        recognition_type: Recognition mode passed to the service on start.
            Accepts a RecognitionType or its name ('free', 'partial', 'search',
            'web_search').
            Default: RecognitionType.FREE

        settings_store: Settings store factory name.
            Supported values: 'memory', 'json'
            Default: 'memory'

        settings_path: File used by the 'json' settings store. Required for it.
            Default: None

        require_sound_on: Reject start requests while sound cues are off.
            Default: False

        reject_empty_text: Reject start requests whose text is blank.
            A start without any text is always accepted.
            Default: True
    """

    recognition_engine: str = "virtual"
    recognition_type: RecognitionType = RecognitionType.FREE
    settings_store: str = "memory"
    settings_path: Optional[Path] = None
    require_sound_on: bool = False
    reject_empty_text: bool = True

    def __post_init__(self):
        """Validate configuration parameters after initialization."""
        if isinstance(self.recognition_type, str):
            try:
                self.recognition_type = RecognitionType[self.recognition_type.upper()]
            except KeyError:
                raise ValueError(
                    f"recognition_type must be one of {[t.name.lower() for t in RecognitionType]}, "
                    f"got '{self.recognition_type}'"
                ) from None

        if isinstance(self.settings_path, str):
            self.settings_path = Path(self.settings_path)

        if self.settings_store == "json" and self.settings_path is None:
            raise ValueError("settings_path is required by the 'json' settings store")
