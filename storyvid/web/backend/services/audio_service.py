"""Audio service: voiceovers, transcription and voice commands."""

import base64
import binascii
import logging
import time
from typing import Any

from ....errors import UpstreamError, ValidationError
from ....media.provider import MediaProvider

logger = logging.getLogger(__name__)

# Checked in order; the first command with a matching phrase wins
VOICE_COMMANDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("next_scene", ("next scene", "next slide")),
    ("previous_scene", ("previous scene", "previous slide", "go back")),
    ("add_scene", ("add scene", "new scene", "create scene")),
    ("delete_scene", ("delete scene", "remove scene")),
    ("play", ("play", "start")),
    ("pause", ("pause", "stop")),
)

# Padding added to synced scene durations so audio never gets cut off
SYNC_PADDING_SECONDS = 0.5

TRANSCRIPTION_CONFIDENCE = 0.95


def match_voice_command(transcription: str) -> str | None:
    """Return the command named in ``transcription``, or None."""
    text = transcription.lower().strip()
    for command, phrases in VOICE_COMMANDS:
        if any(phrase in text for phrase in phrases):
            return command
    return None


def scene_duration(scene: dict[str, Any]) -> float:
    """The scene's own duration in seconds; 0 when missing or not numeric."""
    try:
        return float(scene.get("duration") or 0)
    except (TypeError, ValueError):
        return 0.0


def to_audio_data_uri(audio: bytes) -> str:
    return "data:audio/mp3;base64," + base64.b64encode(audio).decode("ascii")


def decode_audio_data(audio_data: str) -> bytes:
    """Decode base64 audio, with or without a ``data:`` URI prefix."""
    payload = audio_data.split(",", 1)[1] if "," in audio_data else audio_data
    try:
        return base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Invalid audio data: {e}")


class AudioService:
    """Service for speech synthesis and recognition."""

    def __init__(self, media: MediaProvider, words_per_minute: int = 150):
        """Initialize the audio service.

        Args:
            media: Provider for speech synthesis and transcription.
            words_per_minute: Speaking rate used to estimate durations.
        """
        self.media = media
        self.words_per_minute = words_per_minute

    def estimate_duration(self, text: str, speed: float = 1.0) -> float:
        """Seconds needed to speak ``text`` at ``speed``."""
        words = len(text.split())
        return words / self.words_per_minute * 60 / speed

    def generate_voiceover(
        self,
        text: str | None,
        voice: str | None = None,
        speed: float | None = None,
    ) -> dict[str, Any]:
        """Synthesize one voiceover.

        Returns:
            ``audioUrl`` (MP3 data URI) and estimated ``duration`` in seconds.
        """
        if not text:
            raise ValidationError("Text is required for voiceover generation")

        speed = speed or 1.0
        audio = self.media.synthesize_speech(text, voice=voice, speed=speed)
        return {
            "audioUrl": to_audio_data_uri(audio),
            "duration": self.estimate_duration(text, speed),
        }

    def sync_voiceovers(
        self,
        scenes: list[dict[str, Any]] | None,
        voice: str | None = None,
        speed: float | None = None,
    ) -> dict[str, Any]:
        """Synthesize a voiceover for every scene that has one.

        Scenes without voiceover text are skipped. A failure on one scene
        is recorded and the rest carry on, except for missing or rejected
        credentials which abort the whole batch.

        Args:
            scenes: Scenes to voice.
            voice: Voice name, provider default if None.
            speed: Speaking speed multiplier.

        Returns:
            Per-scene voiceovers with their durations stretched to fit the
            audio, any per-scene errors, and totals.
        """
        if not scenes:
            raise ValidationError("Scenes array is required")

        speed = speed or 1.0
        voiceovers = []
        errors = []

        for scene in scenes:
            text = str(scene.get("voiceover") or "")
            if not text.strip():
                continue
            try:
                audio = self.media.synthesize_speech(text, voice=voice, speed=speed, hd=True)
            except UpstreamError as e:
                if e.status_code in (401, 500):
                    raise
                logger.warning("Voiceover failed for scene %s: %s", scene.get("id"), e.message)
                errors.append({"sceneId": scene.get("id"), "error": e.message})
                continue

            estimate = self.estimate_duration(text, speed)
            voiceovers.append(
                {
                    "sceneId": scene.get("id"),
                    "audioUrl": to_audio_data_uri(audio),
                    "duration": max(
                        scene_duration(scene), estimate + SYNC_PADDING_SECONDS
                    ),
                    "text": text,
                }
            )

        logger.info("Synced %d of %d scene voiceovers", len(voiceovers), len(scenes))
        return {
            "voiceovers": voiceovers,
            "errors": errors or None,
            "totalScenes": len(scenes),
            "successCount": len(voiceovers),
            "failureCount": len(errors),
            "totalDuration": sum(v["duration"] for v in voiceovers),
        }

    def transcribe(self, audio_data: str | None, language: str = "en") -> dict[str, Any]:
        if not audio_data:
            raise ValidationError("Audio data is required")

        result = self.media.transcribe(decode_audio_data(audio_data), language=language)
        return {
            "transcription": result.text,
            "confidence": TRANSCRIPTION_CONFIDENCE,
            "language": language,
            "duration": result.duration_seconds,
        }

    def interpret_command(self, transcription: str | None) -> dict[str, Any]:
        if not transcription:
            raise ValidationError("Transcription is required")

        return {
            "command": match_voice_command(transcription),
            "timestamp": int(time.time() * 1000),
            "executed": False,
        }
