"""Render job listing and cancellation router."""

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from ....errors import NotFoundError, ValidationError
from ..dependencies import JobManagerDep
from ..models.responses import RenderJobResponse

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=list[RenderJobResponse])
def list_jobs(
    job_manager: JobManagerDep,
    project_id: Annotated[str | None, Query(alias="projectId")] = None,
) -> list[RenderJobResponse]:
    """List all render jobs, newest first, optionally filtered by project."""
    return [RenderJobResponse.from_job(job) for job in job_manager.list_jobs(project_id=project_id)]


@router.get("/{job_id}", response_model=RenderJobResponse)
def get_job(
    job_id: str,
    job_manager: JobManagerDep,
) -> RenderJobResponse:
    """Get render job status."""
    return RenderJobResponse.from_job(job_manager.get_status(job_id))


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_job(
    job_id: str,
    job_manager: JobManagerDep,
) -> Response:
    """Cancel a render job that has not finished."""
    job = job_manager.get_job(job_id)
    if not job:
        raise NotFoundError("Render job not found")

    if job.status.is_terminal or not job_manager.cancel_job(job_id):
        current = job_manager.get_job(job_id) or job
        raise ValidationError(f"Cannot cancel job with status: {current.status.value}")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
