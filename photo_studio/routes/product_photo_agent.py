import base64
import binascii

from fastapi import APIRouter, status
from loguru import logger

from photo_studio.agents.product_photo_agent.agent.exceptions import InvalidInputError, ProductPhotoError
from photo_studio.agents.product_photo_agent.agent.schemas import GenerationRequest, ImageAsset
from photo_studio.agents.product_photo_agent.agent.utils import ensure_decodable_image
from photo_studio.agents.product_photo_agent.dependencies import ProductPhotoAgentServiceDependency
from photo_studio.routes.schemas.request.product_photo_agent import GenerateProductPhotoRequest
from photo_studio.routes.schemas.response.product_photo_agent import GenerationResponse
from photo_studio.routes.studio import check_upload_size, to_generation_response, to_http_exception

router = APIRouter(prefix="/product-photo-agent")


def decode_image(image_base64: str | None, mime_type: str | None, label: str) -> ImageAsset | None:
    if not image_base64:
        return None
    try:
        data = base64.b64decode(image_base64, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidInputError(f"The {label} image is not valid base64.") from None
    check_upload_size(data)
    image = ImageAsset.from_upload(data, mime_type)
    ensure_decodable_image(image.data)
    return image


@router.post("/generate", response_model=GenerationResponse, status_code=status.HTTP_200_OK)
async def generate_product_photo(
        request: GenerateProductPhotoRequest,
        orchestrator: ProductPhotoAgentServiceDependency
) -> GenerationResponse:
    """Generate a restyled product photo from a self-contained request."""
    logger.info(
        f"generate_product_photo called with style image: {request.style_image_base64 is not None}, "
        f"keywords: {bool(request.keywords)}"
    )

    try:
        generation_request = GenerationRequest(
            product_image=decode_image(request.product_image_base64, request.product_image_mime_type, "product"),
            style_image=decode_image(request.style_image_base64, request.style_image_mime_type, "style"),
            keywords=request.keywords,
            style_parameters=request.to_style_parameters()
        )
        result = await orchestrator.compose_and_generate(generation_request)
    except ProductPhotoError as e:
        raise to_http_exception(e)

    return to_generation_response(result)
