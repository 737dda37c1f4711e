"""API routers for the web backend."""

from .render import router as render_router
from .jobs import router as jobs_router
from .story import router as story_router
from .audio import router as audio_router
from .images import router as images_router
from .export import router as export_router

__all__ = [
    "render_router",
    "jobs_router",
    "story_router",
    "audio_router",
    "images_router",
    "export_router",
]
