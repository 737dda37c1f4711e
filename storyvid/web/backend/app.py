"""FastAPI application factory."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ... import __version__
from ...errors import StoryVidError
from .config import WebConfig
from .dependencies import get_config, get_job_manager, get_websocket_manager
from .routers import (
    audio_router,
    export_router,
    images_router,
    jobs_router,
    render_router,
    story_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    job_manager = get_job_manager()
    ws_manager = get_websocket_manager()
    job_manager.set_websocket_manager(ws_manager)
    job_manager.set_event_loop(asyncio.get_running_loop())

    yield

    # Shutdown
    job_manager.shutdown(wait=False)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": message}``."""

    @app.exception_handler(StoryVidError)
    async def storyvid_error_handler(request: Request, exc: StoryVidError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(config: WebConfig | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        config: Optional configuration. Uses defaults if not provided.

    Returns:
        The FastAPI application.
    """
    if config is None:
        config = get_config()

    app = FastAPI(
        title="StoryVid API",
        description="API for AI-assisted video storyboards and render jobs",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(render_router, prefix="/api")
    app.include_router(jobs_router, prefix="/api")
    app.include_router(story_router, prefix="/api")
    app.include_router(audio_router, prefix="/api")
    app.include_router(images_router, prefix="/api")
    app.include_router(export_router, prefix="/api")

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok"}

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket, client_id: str | None = None):
        """WebSocket endpoint for real-time render updates."""
        ws_manager = get_websocket_manager()
        cid = client_id or f"client_{id(websocket)}"

        await ws_manager.connect(websocket, cid)
        try:
            while True:
                data = await websocket.receive_json()
                if not isinstance(data, dict):
                    continue
                # Handle subscription messages
                if data.get("type") == "subscribe":
                    project_id = data.get("project_id")
                    if project_id:
                        await ws_manager.subscribe_to_project(cid, project_id)
                elif data.get("type") == "unsubscribe":
                    project_id = data.get("project_id")
                    if project_id:
                        await ws_manager.unsubscribe_from_project(cid, project_id)
        except WebSocketDisconnect:
            ws_manager.disconnect(cid)

    return app
