import asyncio
import logging
import os
import threading
from typing import List, Optional

import google.auth
from google.api_core.exceptions import GoogleAPICallError
from google.auth.exceptions import DefaultCredentialsError
from google.cloud.speech_v2 import SpeechClient
from google.cloud.speech_v2.types import cloud_speech

from ..audio_io.audio_source import AudioSource
from ..events import RecognitionErrorEvent, RecognitionResultEvent, ServiceErrorEvent
from .recognition_service import RecognitionService, RecognitionType

logger = logging.getLogger(__name__)

RECOGNITION_MODELS = {
    RecognitionType.FREE: "latest_long",
    RecognitionType.PARTIAL: "latest_long",
    RecognitionType.SEARCH: "latest_short",
    RecognitionType.WEB_SEARCH: "latest_short",
}

# How long `start` waits for a paused stream to finish before giving up
WORKER_JOIN_TIMEOUT = 2.0


def to_bcp47(language: str) -> str:
    """`en_US` -> `en-US`"""
    return language.replace("_", "-")


class GoogleCloudRecognitionService(RecognitionService):
    """Streams audio to Google Cloud Speech-to-Text v2 on a worker thread.

    Results, errors and active state changes are emitted from that worker
    thread. Interim results are published with `is_final=False` for the free
    and partial recognition types.
    """

    SUPPORTED_LANGUAGES = [
        "en_US",
        "en_GB",
        "en_AU",
        "de_DE",
        "es_ES",
        "es_US",
        "fr_FR",
        "it_IT",
        "ja_JP",
        "ko_KR",
        "pt_BR",
        "ru_RU",
        "zh_CN",
    ]

    def __init__(
        self,
        project_id: Optional[str] = None,
        audio_source: Optional[AudioSource] = None,
        default_language: str = "en_US",
        **kwargs,
    ):
        super().__init__()
        self._project_id = project_id
        self._audio_source = audio_source
        self._default_language = default_language

        self._client: Optional[SpeechClient] = None
        self._worker: Optional[threading.Thread] = None
        self._capture_source: Optional[AudioSource] = None
        self._stopping = False

    @staticmethod
    def name() -> str:
        return "google"

    @property
    def supported_languages(self) -> List[str]:
        return list(self.SUPPORTED_LANGUAGES)

    @property
    def default_language(self) -> str:
        return self._default_language

    @property
    def ready(self) -> bool:
        return self._client is not None

    async def check_permissions(self) -> bool:
        return await asyncio.to_thread(self._has_permissions)

    def _has_permissions(self) -> bool:
        try:
            google.auth.default()
        except DefaultCredentialsError as e:
            logger.warning(f"Google Cloud credentials not available: {e}")
            return False

        if self._audio_source is None:
            from ..audio_io.microphone import has_input_device

            if not has_input_device():
                logger.warning("No audio input device available")
                return False

        return True

    async def initialize(self) -> None:
        if self._client is not None:
            return

        if self._project_id is None:
            self._project_id = os.environ["GOOGLE_PROJECT_ID"]

        self._client = await asyncio.to_thread(SpeechClient)
        logger.info(f"Speech client ready for project '{self._project_id}'")

    def _build_config_request(
        self,
        audio_source: AudioSource,
        language: str,
        recognition_type: RecognitionType,
        prompt: Optional[str],
    ) -> cloud_speech.StreamingRecognizeRequest:
        adaptation = None
        if prompt:
            adaptation = cloud_speech.SpeechAdaptation(
                phrase_sets=[
                    cloud_speech.SpeechAdaptation.AdaptationPhraseSet(
                        inline_phrase_set=cloud_speech.PhraseSet(
                            phrases=[cloud_speech.PhraseSet.Phrase(value=prompt)],
                        ),
                    ),
                ],
            )

        recognition_config = cloud_speech.RecognitionConfig(
            explicit_decoding_config=cloud_speech.ExplicitDecodingConfig(
                encoding=cloud_speech.ExplicitDecodingConfig.AudioEncoding.LINEAR16,
                sample_rate_hertz=audio_source.rate,
                audio_channel_count=audio_source.channels,
            ),
            features=cloud_speech.RecognitionFeatures(enable_automatic_punctuation=True),
            adaptation=adaptation,
            language_codes=[to_bcp47(language)],
            model=RECOGNITION_MODELS[recognition_type],
        )

        streaming_config = cloud_speech.StreamingRecognitionConfig(
            config=recognition_config,
            streaming_features=cloud_speech.StreamingRecognitionFeatures(
                interim_results=recognition_type in (RecognitionType.FREE, RecognitionType.PARTIAL),
            ),
        )

        return cloud_speech.StreamingRecognizeRequest(
            recognizer=f"projects/{self._project_id}/locations/global/recognizers/_",
            streaming_config=streaming_config,
        )

    def start(
        self,
        language: str,
        recognition_type: RecognitionType,
        prompt: Optional[str] = None,
    ) -> None:
        if not self.ready:
            self.service_error.emit(ServiceErrorEvent(error="Speech client is not initialized"))
            return

        if self._worker is not None and self._worker.is_alive():
            if not self._stopping and self._capture_source is not None:
                logger.debug("Recognition already running")
                return

            # The previous stream ended or was paused and is still draining
            self._worker.join(timeout=WORKER_JOIN_TIMEOUT)
            if self._worker.is_alive():
                logger.error("Previous recognition stream did not finish in time")
                self.service_error.emit(ServiceErrorEvent(error="Previous recognition stream is still closing"))
                return

        owns_source = self._audio_source is None
        try:
            if owns_source:
                from ..audio_io.microphone import MicrophoneStream

                audio_source = MicrophoneStream()
            else:
                audio_source = self._audio_source

            config_request = self._build_config_request(audio_source, language, recognition_type, prompt)
        except Exception as e:
            logger.error(f"Cannot start recognition: {e}")
            self.service_error.emit(ServiceErrorEvent(error=e))
            return

        self._capture_source = audio_source
        self._stopping = False
        self._worker = threading.Thread(
            target=self._recognition_loop,
            args=(audio_source, config_request, owns_source),
            daemon=True,
            name="RecognitionThread",
        )

        logger.info(f"Starting recognition ({to_bcp47(language)}, {recognition_type.name})")
        self._set_recognition_active(True)
        self._worker.start()

    def _recognition_loop(
        self,
        audio_source: AudioSource,
        config_request: cloud_speech.StreamingRecognizeRequest,
        owns_source: bool,
    ):
        def requests():
            yield config_request
            for content in audio_source.generator():
                yield cloud_speech.StreamingRecognizeRequest(audio=content)

        try:
            audio_source.resume()

            for response in self._client.streaming_recognize(requests=requests()):
                logger.debug(f"Speech-to-Text response: {response}")

                if not response.results:
                    continue

                # Only the first result is still evolving; earlier ones are final
                result = response.results[0]
                if not result.alternatives:
                    continue

                self.recognition_result.emit(
                    RecognitionResultEvent(
                        text=result.alternatives[0].transcript.strip(),
                        is_final=result.is_final,
                        confidence=result.alternatives[0].confidence,
                    )
                )
        except GoogleAPICallError as e:
            logger.error(f"Speech-to-Text service error: {e}")
            self.service_error.emit(ServiceErrorEvent(error=e))
        except Exception as e:
            logger.error(f"Error while recognizing speech: {e}")
            self.recognition_error.emit(RecognitionErrorEvent(error=e))
        finally:
            if owns_source:
                audio_source.close()
            else:
                audio_source.pause()

            self._capture_source = None
            self._set_recognition_active(False)

    def stop(self) -> None:
        audio_source = self._capture_source
        if audio_source is None:
            return

        logger.info("Stopping recognition")
        self._stopping = True
        # Ends the request generator, which closes the stream
        audio_source.pause()
