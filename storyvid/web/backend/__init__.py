"""FastAPI backend for StoryVid."""

from .app import create_app

__all__ = ["create_app"]
