"""Speech, transcription and image generation providers."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import openai

from ..config import Config
from ..errors import UpstreamError, upstream_error_from
from ..understanding.llm_provider import build_openai_client

logger = logging.getLogger(__name__)


@dataclass
class TranscriptionResult:
    """Result of audio transcription."""

    text: str
    duration_seconds: float
    language: str = "en"


class MediaProvider(ABC):
    """Abstract base class for audio and image generation backends."""

    def __init__(self, config: Config):
        self.config = config

    @abstractmethod
    def synthesize_speech(
        self,
        text: str,
        voice: str | None = None,
        speed: float = 1.0,
        hd: bool = False,
    ) -> bytes:
        """Render text to MP3 audio bytes."""

    @abstractmethod
    def transcribe(self, audio: bytes, language: str = "en") -> TranscriptionResult:
        """Transcribe recorded audio (webm) to text."""

    @abstractmethod
    def generate_image(
        self,
        prompt: str,
        size: str | None = None,
        quality: str | None = None,
    ) -> str:
        """Generate an image and return its URL."""


class MockMediaProvider(MediaProvider):
    """Mock provider returning fixed payloads; records every call."""

    def __init__(self, config: Config | None = None):
        super().__init__(config or Config())
        self.calls: list[tuple[str, dict]] = []
        self.fail_on: set[str] = set()

    def _record(self, name: str, **kwargs) -> None:
        self.calls.append((name, kwargs))
        text = kwargs.get("text") or ""
        if any(marker in text for marker in self.fail_on):
            raise UpstreamError(f"Mock failure for: {text}")

    def synthesize_speech(
        self,
        text: str,
        voice: str | None = None,
        speed: float = 1.0,
        hd: bool = False,
    ) -> bytes:
        self._record("synthesize_speech", text=text, voice=voice, speed=speed, hd=hd)
        return b"mock-mp3-audio"

    def transcribe(self, audio: bytes, language: str = "en") -> TranscriptionResult:
        self._record("transcribe", size=len(audio), language=language)
        return TranscriptionResult(
            text="This is a mock transcription.",
            duration_seconds=2.5,
            language=language,
        )

    def generate_image(
        self,
        prompt: str,
        size: str | None = None,
        quality: str | None = None,
    ) -> str:
        self._record("generate_image", prompt=prompt, size=size, quality=quality)
        return "https://images.example.com/mock.png"


class OpenAIMediaProvider(MediaProvider):
    """Media provider using the OpenAI audio and images APIs."""

    def __init__(self, config: Config, client: "openai.OpenAI | None" = None):
        super().__init__(config)
        self._client = client

    @property
    def client(self) -> "openai.OpenAI":
        """Lazy-init OpenAI client."""
        if self._client is None:
            self._client = build_openai_client(self.config.openai_api_key)
        return self._client

    def synthesize_speech(
        self,
        text: str,
        voice: str | None = None,
        speed: float = 1.0,
        hd: bool = False,
    ) -> bytes:
        tts = self.config.tts
        try:
            response = self.client.audio.speech.create(
                model=tts.sync_model if hd else tts.model,
                voice=voice or tts.voice,
                input=text,
                speed=speed,
            )
        except openai.OpenAIError as e:
            logger.warning("Speech synthesis failed: %s", e)
            raise upstream_error_from(e) from e
        return response.content

    def transcribe(self, audio: bytes, language: str = "en") -> TranscriptionResult:
        try:
            transcription = self.client.audio.transcriptions.create(
                file=("audio.webm", audio, "audio/webm"),
                model=self.config.tts.transcription_model,
                language=language,
                response_format="verbose_json",
            )
        except openai.OpenAIError as e:
            logger.warning("Transcription failed: %s", e)
            raise upstream_error_from(e) from e
        return TranscriptionResult(
            text=transcription.text,
            duration_seconds=float(getattr(transcription, "duration", None) or 0.0),
            language=language,
        )

    def generate_image(
        self,
        prompt: str,
        size: str | None = None,
        quality: str | None = None,
    ) -> str:
        image = self.config.image
        try:
            response = self.client.images.generate(
                model=image.model,
                prompt=prompt,
                n=1,
                size=size or image.size,
                quality=quality or image.quality,
                response_format="url",
            )
        except openai.OpenAIError as e:
            logger.warning("Image generation failed: %s", e)
            raise upstream_error_from(e) from e

        url = response.data[0].url if response.data else None
        if not url:
            raise UpstreamError("No image URL in response")
        return url


def get_media_provider(config: Config | None = None) -> MediaProvider:
    """Get the media provider named by ``config.tts.provider``."""
    if config is None:
        from ..config import load_config

        config = load_config()

    provider_name = config.tts.provider.lower()

    if provider_name == "mock":
        return MockMediaProvider(config)
    elif provider_name == "openai":
        return OpenAIMediaProvider(config)
    else:
        raise ValueError(f"Unknown media provider: {provider_name}")
