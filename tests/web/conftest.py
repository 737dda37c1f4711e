"""Test fixtures for web backend tests."""

import time
from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.testclient import TestClient

from storyvid.config import Config
from storyvid.media.provider import MockMediaProvider
from storyvid.understanding.llm_provider import MockLLMProvider
from storyvid.web.backend import dependencies
from storyvid.web.backend.app import register_exception_handlers
from storyvid.web.backend.config import WebConfig
from storyvid.web.backend.services.job_manager import JobManager
from storyvid.web.backend.websocket.manager import WebSocketManager


@pytest.fixture
def web_config() -> WebConfig:
    """Create a test configuration."""
    return WebConfig(host="127.0.0.1", port=8000, cors_origins=["*"])


@pytest.fixture
def job_manager() -> Generator[JobManager, None, None]:
    """Create a fresh job manager that runs the pipeline without delays."""
    manager = JobManager(max_workers=2, phase_delay_scale=0)
    yield manager
    manager.shutdown(wait=False)


@pytest.fixture
def ws_manager() -> WebSocketManager:
    """Create a fresh WebSocket manager for testing."""
    return WebSocketManager()


@pytest.fixture
def mock_llm() -> MockLLMProvider:
    """LLM returning canned payloads; tests may add ``responses``."""
    return MockLLMProvider()


@pytest.fixture
def mock_media(mock_config: Config) -> MockMediaProvider:
    """Speech/image provider returning canned payloads."""
    return MockMediaProvider(mock_config)


@pytest.fixture
def wait_until() -> Callable[..., bool]:
    """Poll a predicate until it holds or the timeout expires."""

    def _wait(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return True
            time.sleep(0.01)
        return predicate()

    return _wait


@pytest.fixture
def test_client(
    web_config: WebConfig,
    mock_config: Config,
    job_manager: JobManager,
    ws_manager: WebSocketManager,
    mock_llm: MockLLMProvider,
    mock_media: MockMediaProvider,
) -> Generator[TestClient, None, None]:
    """Create a test client with mocked dependencies."""
    from storyvid.web.backend.routers import (
        audio_router,
        export_router,
        images_router,
        jobs_router,
        render_router,
        story_router,
    )

    # Clear any cached dependencies
    dependencies.get_config.cache_clear()
    dependencies.get_app_config.cache_clear()
    dependencies.get_job_manager.cache_clear()
    dependencies.get_websocket_manager.cache_clear()

    job_manager.set_websocket_manager(ws_manager)

    # Create app without lifespan to avoid dependency issues
    app = FastAPI(title="StoryVid API - Test")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(render_router, prefix="/api")
    app.include_router(jobs_router, prefix="/api")
    app.include_router(story_router, prefix="/api")
    app.include_router(audio_router, prefix="/api")
    app.include_router(images_router, prefix="/api")
    app.include_router(export_router, prefix="/api")

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    # Override dependencies
    app.dependency_overrides[dependencies.get_config] = lambda: web_config
    app.dependency_overrides[dependencies.get_app_config] = lambda: mock_config
    app.dependency_overrides[dependencies.get_job_manager] = lambda: job_manager
    app.dependency_overrides[dependencies.get_websocket_manager] = lambda: ws_manager
    app.dependency_overrides[dependencies.get_llm_provider] = lambda: mock_llm
    app.dependency_overrides[dependencies.get_media_provider] = lambda: mock_media

    with TestClient(app) as client:
        yield client

    # Cleanup
    app.dependency_overrides.clear()
