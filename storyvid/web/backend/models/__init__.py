"""Pydantic models for API requests and responses."""

from .requests import (
    CamelModel,
    RenderRequest,
    ScriptRequest,
    SceneRequest,
    ScenesRequest,
    OptimizeScenesRequest,
    SmartTransitionsRequest,
    ProjectContext,
    SuggestionsRequest,
    AnalyzeStoryRequest,
    TranslateRequest,
    VoiceToScriptRequest,
    VoiceoverRequest,
    VoiceoverSyncRequest,
    VoiceCommandRequest,
    GenerateImageRequest,
    BackgroundRemovalOptions,
    RemoveBackgroundRequest,
    JSONExportConfig,
    ExportJSONRequest,
    PDFExportConfig,
    ExportPDFRequest,
)
from .responses import (
    RenderStartedResponse,
    RenderJobResponse,
    RenderStatusResponse,
    VoiceoverResponse,
    SceneVoiceover,
    SceneVoiceoverError,
    VoiceoverSyncResponse,
    TranscriptionResponse,
    VoiceCommandResponse,
    GeneratedImageResponse,
    RemoveBackgroundResponse,
    ExportJSONResponse,
    ExportPDFResponse,
)

__all__ = [
    # Requests
    "CamelModel",
    "RenderRequest",
    "ScriptRequest",
    "SceneRequest",
    "ScenesRequest",
    "OptimizeScenesRequest",
    "SmartTransitionsRequest",
    "ProjectContext",
    "SuggestionsRequest",
    "AnalyzeStoryRequest",
    "TranslateRequest",
    "VoiceToScriptRequest",
    "VoiceoverRequest",
    "VoiceoverSyncRequest",
    "VoiceCommandRequest",
    "GenerateImageRequest",
    "BackgroundRemovalOptions",
    "RemoveBackgroundRequest",
    "JSONExportConfig",
    "ExportJSONRequest",
    "PDFExportConfig",
    "ExportPDFRequest",
    # Responses
    "RenderStartedResponse",
    "RenderJobResponse",
    "RenderStatusResponse",
    "VoiceoverResponse",
    "SceneVoiceover",
    "SceneVoiceoverError",
    "VoiceoverSyncResponse",
    "TranscriptionResponse",
    "VoiceCommandResponse",
    "GeneratedImageResponse",
    "RemoveBackgroundResponse",
    "ExportJSONResponse",
    "ExportPDFResponse",
]
