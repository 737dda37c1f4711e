"""Tests for speech, transcription and image providers."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from storyvid.config import Config
from storyvid.errors import UpstreamError
from storyvid.media.provider import (
    MockMediaProvider,
    OpenAIMediaProvider,
    TranscriptionResult,
    get_media_provider,
)


@pytest.fixture
def client():
    client = MagicMock()
    client.audio.speech.create.return_value = SimpleNamespace(content=b"mp3-bytes")
    client.audio.transcriptions.create.return_value = SimpleNamespace(text="Hello world", duration=1.75)
    client.images.generate.return_value = SimpleNamespace(
        data=[SimpleNamespace(url="https://images.example.com/generated.png")]
    )
    return client


@pytest.fixture
def provider(test_config: Config, client) -> OpenAIMediaProvider:
    return OpenAIMediaProvider(test_config, client=client)


class TestOpenAIMediaProvider:
    """Tests for OpenAIMediaProvider."""

    def test_synthesize_speech(self, provider, client):
        assert provider.synthesize_speech("Hi there") == b"mp3-bytes"

        client.audio.speech.create.assert_called_once_with(
            model="tts-1", voice="alloy", input="Hi there", speed=1.0
        )

    def test_synthesize_speech_hd(self, provider, client):
        provider.synthesize_speech("Hi there", voice="nova", speed=1.25, hd=True)

        kwargs = client.audio.speech.create.call_args.kwargs
        assert kwargs["model"] == "tts-1-hd"
        assert kwargs["voice"] == "nova"
        assert kwargs["speed"] == 1.25

    def test_transcribe(self, provider, client):
        result = provider.transcribe(b"webm", language="de")

        assert result == TranscriptionResult(text="Hello world", duration_seconds=1.75, language="de")
        kwargs = client.audio.transcriptions.create.call_args.kwargs
        assert kwargs["model"] == "whisper-1"
        assert kwargs["file"] == ("audio.webm", b"webm", "audio/webm")
        assert kwargs["response_format"] == "verbose_json"

    def test_transcribe_without_duration(self, provider, client):
        client.audio.transcriptions.create.return_value = SimpleNamespace(text="Hi")
        assert provider.transcribe(b"webm").duration_seconds == 0.0

    def test_generate_image(self, provider, client):
        url = provider.generate_image("A rocket")

        assert url == "https://images.example.com/generated.png"
        kwargs = client.images.generate.call_args.kwargs
        assert kwargs["model"] == "dall-e-3"
        assert kwargs["size"] == "1024x1024"
        assert kwargs["quality"] == "standard"
        assert kwargs["n"] == 1

    def test_generate_image_overrides(self, provider, client):
        provider.generate_image("A rocket", size="1792x1024", quality="hd")

        kwargs = client.images.generate.call_args.kwargs
        assert kwargs["size"] == "1792x1024"
        assert kwargs["quality"] == "hd"

    def test_generate_image_without_url(self, provider, client):
        client.images.generate.return_value = SimpleNamespace(data=[])
        with pytest.raises(UpstreamError, match="No image URL"):
            provider.generate_image("A rocket")

    def test_content_policy_violation(self, provider, client):
        request = httpx.Request("POST", "https://api.openai.com/v1/images/generations")
        client.images.generate.side_effect = openai.BadRequestError(
            "rejected",
            response=httpx.Response(400, request=request),
            body={"code": "content_policy_violation"},
        )

        with pytest.raises(UpstreamError) as exc_info:
            provider.generate_image("Something")
        assert exc_info.value.status_code == 400

    def test_speech_rate_limited(self, provider, client):
        request = httpx.Request("POST", "https://api.openai.com/v1/audio/speech")
        client.audio.speech.create.side_effect = openai.RateLimitError(
            "slow down", response=httpx.Response(429, request=request), body=None
        )

        with pytest.raises(UpstreamError) as exc_info:
            provider.synthesize_speech("Hi")
        assert exc_info.value.status_code == 429


class TestMockMediaProvider:
    """Tests for MockMediaProvider."""

    def test_records_calls(self):
        provider = MockMediaProvider()
        provider.synthesize_speech("Hi", voice="echo")
        provider.generate_image("A cat")

        assert [name for name, _ in provider.calls] == ["synthesize_speech", "generate_image"]
        assert provider.calls[0][1]["voice"] == "echo"

    def test_fail_on(self):
        provider = MockMediaProvider()
        provider.fail_on = {"explode"}

        with pytest.raises(UpstreamError, match="Mock failure for: please explode"):
            provider.synthesize_speech("please explode")
        assert provider.synthesize_speech("calm") == b"mock-mp3-audio"


class TestGetMediaProvider:
    """Tests for the provider factory."""

    def test_mock(self, mock_config):
        assert isinstance(get_media_provider(mock_config), MockMediaProvider)

    def test_openai(self, test_config):
        assert isinstance(get_media_provider(test_config), OpenAIMediaProvider)

    def test_unknown(self, test_config):
        test_config.tts.provider = "gramophone"
        with pytest.raises(ValueError, match="Unknown media provider: gramophone"):
            get_media_provider(test_config)
