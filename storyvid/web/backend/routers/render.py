"""Video rendering router."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from ..dependencies import RenderServiceDep
from ..models.requests import RenderRequest
from ..models.responses import RenderJobResponse, RenderStartedResponse, RenderStatusResponse

router = APIRouter(prefix="/render", tags=["render"])


@router.post("", response_model=RenderStartedResponse, status_code=status.HTTP_202_ACCEPTED)
def start_render(
    request: RenderRequest,
    service: RenderServiceDep,
) -> RenderStartedResponse:
    """Start a video render job."""
    job_id, estimated_duration = service.start_render(
        project_id=request.project_id,
        config=request.config,
    )
    return RenderStartedResponse(job_id=job_id, estimated_duration=estimated_duration)


@router.get("", response_model=RenderStatusResponse)
def get_render(
    service: RenderServiceDep,
    job_id: Annotated[str | None, Query(alias="jobId")] = None,
) -> RenderStatusResponse:
    """Get render job status."""
    job = service.get_render(job_id)
    return RenderStatusResponse(job=RenderJobResponse.from_job(job))
