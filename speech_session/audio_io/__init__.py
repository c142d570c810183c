"""Audio input for recognition engines.

`MicrophoneStream` needs PyAudio (``pip install speech-session[microphone]``)
and is only exported when it can be imported.
"""

from .audio_source import AudioSource

__all__ = ["AudioSource"]

try:
    from .microphone import MicrophoneStream, has_input_device  # noqa: F401

    __all__.extend(["MicrophoneStream", "has_input_device"])
except ImportError:
    pass
