"""Image router: illustration generation and background removal."""

from fastapi import APIRouter

from ..dependencies import ImageServiceDep
from ..models.requests import GenerateImageRequest, RemoveBackgroundRequest
from ..models.responses import GeneratedImageResponse, RemoveBackgroundResponse

router = APIRouter(tags=["images"])


@router.post("/generate-image", response_model=GeneratedImageResponse)
def generate_image(request: GenerateImageRequest, service: ImageServiceDep) -> GeneratedImageResponse:
    """Generate a styled storyboard illustration."""
    result = service.generate_image(
        request.prompt,
        request.style,
        custom_style_description=request.custom_style_description,
        size=request.size,
        quality=request.quality,
    )
    return GeneratedImageResponse.model_validate(result)


@router.post("/remove-background", response_model=RemoveBackgroundResponse)
def remove_background(
    request: RemoveBackgroundRequest,
    service: ImageServiceDep,
) -> RemoveBackgroundResponse:
    """Make the background of an image transparent."""
    options = request.config.model_dump(by_alias=True, exclude_none=True) if request.config else {}
    result = service.remove_background(request.image_url, request.method, options)
    return RemoveBackgroundResponse.model_validate(result)
