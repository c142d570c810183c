from abc import ABC, abstractmethod
from typing import Iterator


class AudioSource(ABC):
    """Abstract interface for the PCM sources fed to a recognition engine.

    Implementations must provide:

    - `rate`: sample rate in Hz
    - `channels`: number of audio channels
    - `sample_size`: bytes per sample (e.g., 2 for 16-bit PCM)
    - `resume()`: start or resume capturing
    - `pause()`: stop capturing and let `generator()` finish
    - `generator()`: yield PCM byte chunks until paused
    - `close()`: release the underlying device
    """

    @property
    @abstractmethod
    def channels(self) -> int: ...

    @property
    @abstractmethod
    def rate(self) -> int: ...

    @property
    @abstractmethod
    def sample_size(self) -> int: ...

    @abstractmethod
    def resume(self) -> None: ...

    @abstractmethod
    def pause(self) -> None: ...

    @abstractmethod
    def generator(self) -> Iterator[bytes]: ...

    def close(self) -> None:
        self.pause()
