"""Audio, image generation and image processing."""

from .provider import (
    MediaProvider,
    MockMediaProvider,
    OpenAIMediaProvider,
    TranscriptionResult,
    get_media_provider,
)

__all__ = [
    "MediaProvider",
    "MockMediaProvider",
    "OpenAIMediaProvider",
    "TranscriptionResult",
    "get_media_provider",
]
