"""Single-user studio session: image slots, preview handles and the generation lifecycle."""

from typing import Dict, Optional
from uuid import uuid4

from loguru import logger

from photo_studio.agents.product_photo_agent.agent.exceptions import InvalidInputError, ProductPhotoError, \
    SessionBusyError
from photo_studio.agents.product_photo_agent.agent.schemas import GenerationRequest, GenerationResult, ImageAsset, \
    StyleParameters
from photo_studio.agents.product_photo_agent.services.product_photo_agent_service import ProductPhotoAgentService
from photo_studio.enums.product_photo import SessionState


class PreviewRegistry:
    """Live preview handles; each handle serves one uploaded image until released."""

    def __init__(self):
        self._handles: Dict[str, ImageAsset] = {}

    def acquire(self, image: ImageAsset) -> str:
        handle_id = uuid4().hex
        self._handles[handle_id] = image
        return handle_id

    def release(self, handle_id: Optional[str]) -> None:
        if handle_id is not None and self._handles.pop(handle_id, None) is not None:
            logger.debug(f"Released preview handle {handle_id}")

    def release_all(self) -> None:
        count = len(self._handles)
        self._handles.clear()
        if count:
            logger.debug(f"Released {count} preview handle(s)")

    def get(self, handle_id: str) -> Optional[ImageAsset]:
        return self._handles.get(handle_id)

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, handle_id: str) -> bool:
        return handle_id in self._handles


class StudioSession:
    """
    Holds the inputs and the last outcome of the single user session.

    Only one generation may run at a time. Clearing an image slot only empties
    that slot and releases its preview; the state and last result are kept.
    """

    def __init__(self, product_photo_agent_service: ProductPhotoAgentService):
        self.product_photo_agent_service = product_photo_agent_service
        self.previews = PreviewRegistry()

        self.state = SessionState.IDLE
        self.product_image: Optional[ImageAsset] = None
        self.product_preview_id: Optional[str] = None
        self.style_image: Optional[ImageAsset] = None
        self.style_preview_id: Optional[str] = None
        self.keywords: str = ""
        self.style_parameters = StyleParameters()
        self.result: Optional[GenerationResult] = None
        self.error: Optional[str] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def is_running(self) -> bool:
        return self.state == SessionState.RUNNING

    # =========================================================================
    # IMAGE SLOTS
    # =========================================================================

    def set_product_image(self, image: ImageAsset) -> str:
        self.previews.release(self.product_preview_id)
        self.product_image = image
        self.product_preview_id = self.previews.acquire(image)
        logger.info(f"Product image set ({image.mime_type}, {image.size} bytes)")
        return self.product_preview_id

    def clear_product_image(self) -> None:
        self.previews.release(self.product_preview_id)
        self.product_image = None
        self.product_preview_id = None
        logger.info("Product image cleared")

    def set_style_image(self, image: ImageAsset) -> str:
        self.previews.release(self.style_preview_id)
        self.style_image = image
        self.style_preview_id = self.previews.acquire(image)
        logger.info(f"Style image set ({image.mime_type}, {image.size} bytes)")
        return self.style_preview_id

    def clear_style_image(self) -> None:
        self.previews.release(self.style_preview_id)
        self.style_image = None
        self.style_preview_id = None
        logger.info("Style image cleared")

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def _fail(self, message: str) -> None:
        self.state = SessionState.FAILED
        self.error = message

    async def submit(
            self,
            keywords: Optional[str] = None,
            style_parameters: Optional[StyleParameters] = None
    ) -> GenerationResult:
        """
        Run one compose-and-generate workflow with the current inputs.

        Args:
            keywords: Style keywords; keeps the previous value when omitted
            style_parameters: Composition choices; keeps the previous value when omitted

        Returns:
            The generated result, also kept on the session

        Raises:
            SessionBusyError: A generation is already running
            ProductPhotoError: Any workflow failure, recorded on the session before re-raising
        """
        if self.is_running:
            raise SessionBusyError("A generation is already in progress.")

        if keywords is not None:
            self.keywords = keywords
        if style_parameters is not None:
            self.style_parameters = style_parameters

        self.state = SessionState.VALIDATING
        self.result = None
        self.error = None

        request = GenerationRequest(
            product_image=self.product_image,
            style_image=self.style_image,
            keywords=self.keywords,
            style_parameters=self.style_parameters
        )

        try:
            self.product_photo_agent_service.validate_request(request)
        except InvalidInputError as e:
            self.state = SessionState.INVALID_INPUT
            logger.warning(f"Rejected generation request: {e.message}")
            self.error = e.message
            self.state = SessionState.IDLE
            raise

        self.state = SessionState.RUNNING
        try:
            result = await self.product_photo_agent_service.compose_and_generate(request)
        except ProductPhotoError as e:
            self._fail(e.message)
            raise
        except Exception as e:
            logger.error(f"Unexpected error during generation: {e}")
            self._fail(str(e) or "An unexpected error occurred.")
            raise

        self.result = result
        self.state = SessionState.SUCCEEDED
        return result

    def reset(self) -> None:
        if self.is_running:
            raise SessionBusyError("Cannot reset while a generation is in progress.")
        self.clear_product_image()
        self.clear_style_image()
        self.keywords = ""
        self.style_parameters = StyleParameters()
        self.result = None
        self.error = None
        self.state = SessionState.IDLE
        logger.info("Studio session reset")

    def close(self) -> None:
        """Release every preview handle held by the session."""
        self.previews.release_all()
        self.product_preview_id = None
        self.style_preview_id = None
