from fastapi import APIRouter, File, HTTPException, Response, UploadFile, status
from loguru import logger

from photo_studio.agents.product_photo_agent.agent.exceptions import ConfigurationError, InvalidInputError, \
    NoImageProducedError, ProductPhotoError, SessionBusyError, TransportError
from photo_studio.agents.product_photo_agent.agent.schemas import ALLOWED_UPLOAD_MIME_TYPES, GenerationResult, \
    ImageAsset, StyleParameters
from photo_studio.agents.product_photo_agent.agent.utils import ensure_decodable_image, extension_for_mime_type, \
    result_to_image_asset
from photo_studio.agents.product_photo_agent.dependencies import StudioSessionDependency
from photo_studio.agents.product_photo_agent.services.studio_session import StudioSession
from photo_studio.config.settings import get_settings
from photo_studio.enums.product_photo import AspectRatio, CameraPerspective, LightingStyle
from photo_studio.routes.schemas.request.product_photo_agent import GenerateStudioImageRequest
from photo_studio.routes.schemas.response.product_photo_agent import GenerationResponse, ImageSlotResponse, \
    StudioStateResponse, StyleOptionsResponse

router = APIRouter(prefix="/studio")

ERROR_STATUS_CODES = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    SessionBusyError: status.HTTP_409_CONFLICT,
    NoImageProducedError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    TransportError: status.HTTP_502_BAD_GATEWAY,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_exception(error: ProductPhotoError) -> HTTPException:
    status_code = ERROR_STATUS_CODES.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTTPException(status_code=status_code, detail=error.message)


def to_generation_response(result: GenerationResult) -> GenerationResponse:
    return GenerationResponse(
        image_data_uri=result.data_uri,
        mime_type=result.mime_type,
        prompt=result.prompt,
        model_text=result.model_text
    )


def check_upload_size(data: bytes) -> None:
    max_bytes = get_settings().MAX_UPLOAD_BYTES
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Image exceeds the {max_bytes} byte upload limit."
        )


async def read_upload(file: UploadFile) -> ImageAsset:
    """Read an uploaded file into an ImageAsset, enforcing type and size limits."""
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if content_type not in ALLOWED_UPLOAD_MIME_TYPES:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail=f"Unsupported image type '{content_type}'. Please upload a PNG, JPG, or WEBP image."
        )

    data = await file.read()
    check_upload_size(data)

    try:
        image = ImageAsset.from_upload(data, content_type)
        ensure_decodable_image(image.data)
    except InvalidInputError as e:
        raise to_http_exception(e)
    return image


def slot_response(slot: str, image: ImageAsset | None, preview_id: str | None) -> ImageSlotResponse | None:
    if image is None or preview_id is None:
        return None
    return ImageSlotResponse(slot=slot, preview_id=preview_id, mime_type=image.mime_type, size_bytes=image.size)


def state_response(session: StudioSession) -> StudioStateResponse:
    return StudioStateResponse(
        state=session.state,
        product_image=slot_response("product", session.product_image, session.product_preview_id),
        style_image=slot_response("style", session.style_image, session.style_preview_id),
        keywords=session.keywords,
        aspect_ratio=session.style_parameters.aspect_ratio.value,
        lighting_style=session.style_parameters.lighting_style.value,
        camera_perspective=session.style_parameters.camera_perspective.value,
        error=session.error,
        has_result=session.result is not None
    )


@router.get("/options", response_model=StyleOptionsResponse, status_code=status.HTTP_200_OK)
async def get_style_options() -> StyleOptionsResponse:
    """Return the option sets of the aspect ratio, lighting and perspective selectors."""
    defaults = StyleParameters()
    return StyleOptionsResponse(
        aspect_ratios=[option.value for option in AspectRatio],
        lighting_styles=[option.value for option in LightingStyle],
        camera_perspectives=[option.value for option in CameraPerspective],
        defaults={
            "aspect_ratio": defaults.aspect_ratio.value,
            "lighting_style": defaults.lighting_style.value,
            "camera_perspective": defaults.camera_perspective.value,
        }
    )


@router.put("/product-image", response_model=ImageSlotResponse, status_code=status.HTTP_200_OK)
async def upload_product_image(
        session: StudioSessionDependency,
        file: UploadFile = File(...)
) -> ImageSlotResponse:
    """Select the product image, replacing (and releasing) any previous one."""
    logger.info(f"upload_product_image called with filename: {file.filename}")

    image = await read_upload(file)
    preview_id = session.set_product_image(image)
    return slot_response("product", image, preview_id)


@router.delete("/product-image", response_model=StudioStateResponse, status_code=status.HTTP_200_OK)
async def clear_product_image(session: StudioSessionDependency) -> StudioStateResponse:
    logger.info("clear_product_image called")
    session.clear_product_image()
    return state_response(session)


@router.put("/style-image", response_model=ImageSlotResponse, status_code=status.HTTP_200_OK)
async def upload_style_image(
        session: StudioSessionDependency,
        file: UploadFile = File(...)
) -> ImageSlotResponse:
    """Select the style reference image, replacing (and releasing) any previous one."""
    logger.info(f"upload_style_image called with filename: {file.filename}")

    image = await read_upload(file)
    preview_id = session.set_style_image(image)
    return slot_response("style", image, preview_id)


@router.delete("/style-image", response_model=StudioStateResponse, status_code=status.HTTP_200_OK)
async def clear_style_image(session: StudioSessionDependency) -> StudioStateResponse:
    logger.info("clear_style_image called")
    session.clear_style_image()
    return state_response(session)


@router.get("/previews/{preview_id}", status_code=status.HTTP_200_OK)
async def get_preview(preview_id: str, session: StudioSessionDependency) -> Response:
    image = session.previews.get(preview_id)
    if image is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Preview not found")
    return Response(content=image.data, media_type=image.mime_type)


@router.post("/generate", response_model=GenerationResponse, status_code=status.HTTP_200_OK)
async def generate(
        request: GenerateStudioImageRequest,
        session: StudioSessionDependency
) -> GenerationResponse:
    """Run the describe/expand and generate workflow on the current session inputs."""
    logger.info(
        f"generate called with aspect_ratio: {request.aspect_ratio.value}, "
        f"lighting_style: {request.lighting_style.value}, camera_perspective: {request.camera_perspective.value}"
    )

    try:
        result = await session.submit(
            keywords=request.keywords or "",
            style_parameters=request.to_style_parameters()
        )
    except ProductPhotoError as e:
        raise to_http_exception(e)

    return to_generation_response(result)


@router.get("/state", response_model=StudioStateResponse, status_code=status.HTTP_200_OK)
async def get_state(session: StudioSessionDependency) -> StudioStateResponse:
    return state_response(session)


@router.get("/result", response_model=GenerationResponse, status_code=status.HTTP_200_OK)
async def get_result(session: StudioSessionDependency) -> GenerationResponse:
    if session.result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No generated image yet")
    return to_generation_response(session.result)


@router.get("/result/download", status_code=status.HTTP_200_OK)
async def download_result(session: StudioSessionDependency) -> Response:
    """Return the generated image as a file download."""
    if session.result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No generated image yet")

    image = result_to_image_asset(session.result)
    filename = f"generated-image.{extension_for_mime_type(image.mime_type)}"
    return Response(
        content=image.data,
        media_type=image.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.post("/reset", response_model=StudioStateResponse, status_code=status.HTTP_200_OK)
async def reset(session: StudioSessionDependency) -> StudioStateResponse:
    logger.info("reset called")
    try:
        session.reset()
    except SessionBusyError as e:
        raise to_http_exception(e)
    return state_response(session)
