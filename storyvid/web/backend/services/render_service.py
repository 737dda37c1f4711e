"""Render service for video generation."""

from typing import Any

from ....errors import ValidationError
from .job_manager import JobManager, RenderJob


class RenderService:
    """Service for video rendering.

    Thin layer over the job manager that owns request validation.
    """

    def __init__(self, job_manager: JobManager):
        """Initialize the render service.

        Args:
            job_manager: Job manager that tracks render jobs.
        """
        self.job_manager = job_manager

    def start_render(self, project_id: str | None, config: Any) -> tuple[str, float]:
        """Start a video render job.

        Args:
            project_id: The project ID.
            config: Render configuration, stored as given.

        Returns:
            The job ID and the estimated duration in seconds.

        Raises:
            ValidationError: If the project ID or config is missing.
        """
        if not project_id or config is None:
            raise ValidationError("Project ID and config are required")

        job_id = self.job_manager.submit_render(project_id, config)
        return job_id, self.job_manager.estimated_duration

    def get_render(self, job_id: str | None) -> RenderJob:
        """Get the current state of a render job.

        Raises:
            ValidationError: If no job ID was given.
            NotFoundError: If the job does not exist.
        """
        if not job_id:
            raise ValidationError("Job ID is required")
        return self.job_manager.get_status(job_id)
