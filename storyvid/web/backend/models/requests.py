"""Pydantic request models for API endpoints.

Fields are camelCase on the wire. Required values are declared optional
here and checked by the services, so that a missing value produces the
same ``{"error": ...}`` message whichever route receives it.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Scene = dict[str, Any]


class CamelModel(BaseModel):
    """Base model reading and writing camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RenderRequest(CamelModel):
    """Request to render a video."""

    project_id: str | None = Field(default=None, description="Project to render")
    config: Any = Field(default=None, description="Render configuration, stored verbatim")


class ScriptRequest(CamelModel):
    """Request carrying a script (scene generation, script improvement)."""

    script: str | None = None


class SceneRequest(CamelModel):
    """Request carrying a single scene."""

    scene: Scene | None = None


class ScenesRequest(CamelModel):
    """Request carrying a list of scenes."""

    scenes: list[Scene] | None = None


class OptimizeScenesRequest(ScenesRequest):
    """Request to tighten scene pacing."""

    target_duration: float = Field(default=60, description="Target total duration in seconds")


class SmartTransitionsRequest(ScenesRequest):
    """Request for transition recommendations."""

    music_bpm: float | None = Field(default=None, description="Tempo of the soundtrack")


class ProjectContext(CamelModel):
    """Who the video is for."""

    genre: str = "general"
    target_audience: str = "general"
    purpose: str = "presentation"


class SuggestionsRequest(SceneRequest):
    """Request for improvement ideas on a scene."""

    project_context: ProjectContext = Field(default_factory=ProjectContext)


class AnalyzeStoryRequest(CamelModel):
    """Request to analyse a script and its scenes."""

    script: str | None = None
    scenes: list[Scene] | None = None
    genre: str = "general"


class TranslateRequest(CamelModel):
    """Request to translate text."""

    text: str | None = None
    target_language: str | None = Field(default=None, description="Language code or name")
    source_language: str | None = Field(default=None, description="Language code, English if unknown")
    context: str = Field(default="script", description="What kind of text this is")


class VoiceToScriptRequest(CamelModel):
    """Request to transcribe recorded audio."""

    audio_data: str | None = Field(default=None, description="Base64 audio or data URI")
    language: str = "en"


class VoiceoverRequest(CamelModel):
    """Request to synthesize one voiceover."""

    text: str | None = None
    voice: str | None = None
    speed: float | None = Field(default=None, gt=0, le=4)


class VoiceoverSyncRequest(ScenesRequest):
    """Request to synthesize voiceovers for every scene."""

    voice: str | None = None
    speed: float | None = Field(default=None, gt=0, le=4)


class VoiceCommandRequest(CamelModel):
    """Request to interpret a spoken command."""

    transcription: str | None = None


class GenerateImageRequest(CamelModel):
    """Request to generate an illustration."""

    prompt: str | None = None
    style: str | None = Field(default=None, description="modern-flat, hand-drawn, corporate or custom")
    custom_style_description: str | None = None
    size: str | None = Field(default=None, description="Image size, e.g. 1024x1024")
    quality: str | None = Field(default=None, description="standard or hd")


class BackgroundRemovalOptions(CamelModel):
    """Options for background removal."""

    target_color: str | None = None
    tolerance: float | None = Field(default=None, ge=0)
    edge_threshold: int | None = Field(default=None, ge=0, le=255)
    smooth_edges: bool = False
    feather_amount: float | None = Field(default=None, ge=0)
    mask_path: str | None = Field(default=None, description="URL or data URI of a greyscale mask")


class RemoveBackgroundRequest(CamelModel):
    """Request to make an image background transparent."""

    image_url: str | None = None
    method: str | None = None
    config: BackgroundRemovalOptions | None = None


class JSONExportConfig(CamelModel):
    """Options for JSON export."""

    version: str = "1.0.0"
    include_metadata: bool = False
    include_assets: bool = False
    pretty: bool = False


class ExportJSONRequest(CamelModel):
    """Request to export a project as JSON."""

    project: dict[str, Any] | None = None
    config: JSONExportConfig = Field(default_factory=JSONExportConfig)


class PDFExportConfig(CamelModel):
    """Options for a PDF storyboard, echoed back for client-side rendering."""

    format: str = "storyboard"
    page_size: str = "a4"
    orientation: str = "landscape"
    include_scene_thumbnails: bool = True
    include_scene_descriptions: bool = True
    include_voiceover_text: bool = True
    include_timestamps: bool = True
    include_page_numbers: bool = True
    include_branding: bool = True
    quality: str = "high"


class ExportPDFRequest(CamelModel):
    """Request to prepare a PDF export of a project."""

    project: dict[str, Any] | None = None
    config: PDFExportConfig = Field(default_factory=PDFExportConfig)
