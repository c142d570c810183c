import logging
import queue

import pyaudio

from .audio_source import AudioSource

logger = logging.getLogger(__name__)

# Audio capture parameters
RATE = 16000
CHUNK = int(RATE / 10)  # 100ms


def has_input_device() -> bool:
    """Whether PyAudio can see at least one capture device."""
    audio_interface = pyaudio.PyAudio()
    try:
        for index in range(audio_interface.get_device_count()):
            if audio_interface.get_device_info_by_index(index).get("maxInputChannels", 0) > 0:
                return True
        return False
    finally:
        audio_interface.terminate()


class MicrophoneStream(AudioSource):
    """Default input device exposed as a generator of 16-bit mono PCM chunks."""

    def __init__(self, rate: int = RATE, chunk: int = CHUNK) -> None:
        self._rate = rate
        self._chunk = chunk
        self._channels = 1
        self._sample_format = pyaudio.paInt16

        # Filled from the PyAudio callback thread
        self._buff = queue.Queue()
        self._closed = True

        self._audio_interface = pyaudio.PyAudio()
        self._audio_stream = self._audio_interface.open(
            format=self._sample_format,
            channels=self._channels,
            rate=self._rate,
            input=True,
            frames_per_buffer=self._chunk,
            stream_callback=self._fill_buffer,
            start=False,
        )

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def rate(self) -> int:
        return self._rate

    @property
    def sample_size(self) -> int:
        return self._audio_interface.get_sample_size(self._sample_format)

    def _fill_buffer(self, in_data, frame_count, time_info, status_flags):
        self._buff.put(in_data)
        return None, pyaudio.paContinue

    def resume(self) -> None:
        # Drop audio and end markers left over from a previous capture
        with self._buff.mutex:
            self._buff.queue.clear()

        self._closed = False
        self._audio_stream.start_stream()

    def pause(self) -> None:
        self._audio_stream.stop_stream()
        self._closed = True
        # Wake up a generator blocked on an empty buffer
        self._buff.put(None)

    def close(self) -> None:
        self.pause()
        self._audio_stream.close()
        self._audio_interface.terminate()

    def generator(self):
        while not self._closed:
            chunk = self._buff.get()
            if chunk is None:
                return
            data = [chunk]

            # Drain whatever else arrived meanwhile
            while True:
                try:
                    chunk = self._buff.get(block=False)
                except queue.Empty:
                    break
                if chunk is None:
                    return
                data.append(chunk)

            yield b"".join(data)
