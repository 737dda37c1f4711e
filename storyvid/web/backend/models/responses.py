"""Pydantic response models for API endpoints."""

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from ..services.job_manager import RenderJob
from .requests import CamelModel


class RenderStartedResponse(CamelModel):
    """Response when a render job is started."""

    job_id: str
    estimated_duration: float = Field(description="Advisory total render time in seconds")


class RenderJobResponse(CamelModel):
    """Full render job status."""

    id: str
    project_id: str
    config: Any
    status: Literal["pending", "processing", "rendering", "encoding", "completed", "failed", "cancelled"]
    progress: int = Field(ge=0, le=100, description="Progress percentage")
    current_step: str
    start_time: datetime
    end_time: datetime | None = None
    estimated_time_remaining: float
    output_url: str | None = None
    error: str | None = None

    @classmethod
    def from_job(cls, job: RenderJob) -> "RenderJobResponse":
        return cls(
            id=job.id,
            project_id=job.project_id,
            config=job.config,
            status=job.status.value,
            progress=job.progress,
            current_step=job.current_step,
            start_time=job.start_time,
            end_time=job.end_time,
            estimated_time_remaining=job.estimated_time_remaining,
            output_url=job.output_url,
            error=job.error,
        )


class RenderStatusResponse(CamelModel):
    """Envelope for a single job lookup."""

    job: RenderJobResponse


class VoiceoverResponse(CamelModel):
    """A synthesized voiceover."""

    audio_url: str = Field(description="data:audio/mp3;base64 URI")
    duration: float = Field(description="Estimated spoken duration in seconds")


class SceneVoiceover(CamelModel):
    """Voiceover produced for one scene."""

    scene_id: str | None
    audio_url: str
    duration: float
    text: str


class SceneVoiceoverError(CamelModel):
    """Voiceover failure for one scene."""

    scene_id: str | None
    error: str


class VoiceoverSyncResponse(CamelModel):
    """Result of synthesizing voiceovers for a list of scenes."""

    voiceovers: list[SceneVoiceover]
    errors: list[SceneVoiceoverError] | None = None
    total_scenes: int
    success_count: int
    failure_count: int
    total_duration: float


class TranscriptionResponse(CamelModel):
    """Speech-to-text result."""

    transcription: str
    confidence: float
    language: str
    duration: float


class VoiceCommandResponse(CamelModel):
    """Command recognised in a transcription."""

    command: str | None
    timestamp: int = Field(description="Epoch milliseconds")
    executed: bool = False


class GeneratedImageResponse(CamelModel):
    """A generated illustration."""

    image_url: str
    prompt: str = Field(description="Prompt sent to the image model")
    original_prompt: str
    style: str


class RemoveBackgroundResponse(CamelModel):
    """Image with its background removed."""

    transparent_image_url: str = Field(description="data:image/png;base64 URI")
    original_image_url: str
    method: str
    processing_time: int = Field(description="Milliseconds")


class ExportJSONResponse(CamelModel):
    """Serialized project export."""

    success: bool = True
    file_name: str
    file_size: int = Field(description="Size of jsonString in UTF-8 bytes")
    data: dict[str, Any]
    json_string: str
    message: str = "JSON export generated successfully"


class ExportPDFResponse(CamelModel):
    """Metadata for rendering a project as a PDF on the client."""

    success: bool = True
    file_name: str
    metadata: dict[str, Any]
    project_data: dict[str, Any]
    config: dict[str, Any]
    message: str = "PDF generation configuration prepared"
