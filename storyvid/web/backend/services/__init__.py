"""Service layer for the web backend.

Services wrap the providers and core modules to provide
a clean interface for API endpoints.
"""

from .job_manager import JobManager, JobStatus, RenderJob, RenderPhase, RENDER_PHASES
from .render_service import RenderService
from .story_service import StoryService
from .audio_service import AudioService
from .image_service import ImageService
from .export_service import ExportService

__all__ = [
    "JobManager",
    "JobStatus",
    "RenderJob",
    "RenderPhase",
    "RENDER_PHASES",
    "RenderService",
    "StoryService",
    "AudioService",
    "ImageService",
    "ExportService",
]
