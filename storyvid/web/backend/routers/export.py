"""Project export router."""

from fastapi import APIRouter

from ..dependencies import ExportServiceDep
from ..models.requests import ExportJSONRequest, ExportPDFRequest
from ..models.responses import ExportJSONResponse, ExportPDFResponse

router = APIRouter(tags=["export"])


@router.post("/export-json", response_model=ExportJSONResponse)
def export_json(request: ExportJSONRequest, service: ExportServiceDep) -> ExportJSONResponse:
    """Export a project as JSON."""
    config = request.config
    result = service.export_json(
        request.project,
        version=config.version,
        include_metadata=config.include_metadata,
        include_assets=config.include_assets,
        pretty=config.pretty,
    )
    return ExportJSONResponse.model_validate(result)


@router.post("/export-pdf", response_model=ExportPDFResponse)
def export_pdf(request: ExportPDFRequest, service: ExportServiceDep) -> ExportPDFResponse:
    """Prepare a PDF storyboard export for client-side rendering."""
    result = service.export_pdf(request.project, request.config.model_dump(by_alias=True))
    return ExportPDFResponse.model_validate(result)
