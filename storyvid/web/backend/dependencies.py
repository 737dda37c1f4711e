"""Dependency injection for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from ...config import Config, load_config
from ...media.provider import MediaProvider, get_media_provider as build_media_provider
from ...understanding.llm_provider import LLMProvider, get_llm_provider as build_llm_provider
from .config import WebConfig
from .services.audio_service import AudioService
from .services.export_service import ExportService
from .services.image_service import ImageService
from .services.job_manager import JobManager
from .services.render_service import RenderService
from .services.story_service import StoryService
from .websocket.manager import WebSocketManager


@lru_cache
def get_config() -> WebConfig:
    """Get the web configuration (cached)."""
    return WebConfig()


@lru_cache
def get_app_config() -> Config:
    """Get the application configuration (cached)."""
    return load_config(get_config().config_path)


@lru_cache
def get_websocket_manager() -> WebSocketManager:
    """Get the WebSocket manager (cached singleton)."""
    return WebSocketManager()


@lru_cache
def get_job_manager() -> JobManager:
    """Get the job manager (cached singleton)."""
    return JobManager.from_config(get_app_config().render)


@lru_cache
def get_llm_provider() -> LLMProvider:
    """Get the LLM provider (cached singleton)."""
    return build_llm_provider(get_app_config())


@lru_cache
def get_media_provider() -> MediaProvider:
    """Get the speech/image provider (cached singleton)."""
    return build_media_provider(get_app_config())


def get_render_service(
    job_manager: Annotated[JobManager, Depends(get_job_manager)],
) -> RenderService:
    """Get the render service."""
    return RenderService(job_manager=job_manager)


def get_story_service(
    llm: Annotated[LLMProvider, Depends(get_llm_provider)],
) -> StoryService:
    """Get the story service."""
    return StoryService(llm=llm)


def get_audio_service(
    media: Annotated[MediaProvider, Depends(get_media_provider)],
    config: Annotated[Config, Depends(get_app_config)],
) -> AudioService:
    """Get the audio service."""
    return AudioService(media=media, words_per_minute=config.tts.words_per_minute)


def get_image_service(
    media: Annotated[MediaProvider, Depends(get_media_provider)],
) -> ImageService:
    """Get the image service."""
    return ImageService(media=media)


def get_export_service() -> ExportService:
    """Get the export service."""
    return ExportService()


# Type aliases for cleaner router signatures
ConfigDep = Annotated[WebConfig, Depends(get_config)]
AppConfigDep = Annotated[Config, Depends(get_app_config)]
JobManagerDep = Annotated[JobManager, Depends(get_job_manager)]
WebSocketManagerDep = Annotated[WebSocketManager, Depends(get_websocket_manager)]
RenderServiceDep = Annotated[RenderService, Depends(get_render_service)]
StoryServiceDep = Annotated[StoryService, Depends(get_story_service)]
AudioServiceDep = Annotated[AudioService, Depends(get_audio_service)]
ImageServiceDep = Annotated[ImageService, Depends(get_image_service)]
ExportServiceDep = Annotated[ExportService, Depends(get_export_service)]
