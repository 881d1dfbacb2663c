"""Product Photo Agent wrapping the three Gemini calls of the restyling workflow."""

from typing import Optional

from google import genai
from google.genai import types
from loguru import logger

from photo_studio.agents.product_photo_agent.agent.exceptions import ConfigurationError, TransportError
from photo_studio.agents.product_photo_agent.agent.prompt_templates.v1.product_photo_agent import \
    DESCRIBE_STYLE_PROMPT, build_expand_keywords_prompt
from photo_studio.agents.product_photo_agent.agent.schemas import ImageAsset
from photo_studio.agents.product_photo_agent.agent.utils import image_asset_to_part
from photo_studio.config.settings import get_settings


class ProductPhotoAgent:
    """Agent for describing styles and generating product photographs via the Gemini API."""

    def __init__(self, client: Optional[genai.Client] = None):
        """
        Initialize the Product Photo Agent.

        Args:
            client: Preconfigured GenAI client (built from GEMINI_API_KEY on first use when omitted)
        """
        self.settings = get_settings()
        self.style_model = self.settings.STYLE_DESCRIPTION_MODEL
        self.image_model = self.settings.IMAGE_GENERATION_MODEL
        self._client = client

        logger.info(
            f"Initialized ProductPhotoAgent with style model: {self.style_model}, "
            f"image model: {self.image_model}"
        )

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.settings.GEMINI_API_KEY:
                raise ConfigurationError("GEMINI_API_KEY environment variable not set")
            self._client = genai.Client(api_key=self.settings.GEMINI_API_KEY)
        return self._client

    @staticmethod
    def _response_text(response: types.GenerateContentResponse, what: str) -> str:
        text = response.text
        if not text or not text.strip():
            raise TransportError(f"Gemini returned no text for the {what}.")
        return text.strip()

    async def describe_style(self, style_image: ImageAsset) -> str:
        """
        Describe the visual style of a reference image.

        Args:
            style_image: Style reference image

        Returns:
            Paragraph covering lighting, color palette, mood, composition, texture and aesthetic
        """
        client = self._get_client()
        logger.info(f"Describing style image ({style_image.mime_type}, {style_image.size} bytes)")

        try:
            response = await client.aio.models.generate_content(
                model=self.style_model,
                contents=[image_asset_to_part(style_image), DESCRIBE_STYLE_PROMPT]
            )
        except Exception as e:
            logger.error(f"Error describing style image: {e}")
            raise TransportError(str(e)) from e

        description = self._response_text(response, "style description")
        logger.debug(f"Style description: {description}")
        return description

    async def expand_keywords(self, keywords: str) -> str:
        """
        Expand a short style phrase into a single evocative paragraph.

        Args:
            keywords: User-provided keywords or short phrase

        Returns:
            Expanded style description
        """
        client = self._get_client()
        logger.info(f"Expanding style keywords ({len(keywords)} chars)")

        try:
            response = await client.aio.models.generate_content(
                model=self.style_model,
                contents=build_expand_keywords_prompt(keywords)
            )
        except Exception as e:
            logger.error(f"Error expanding keywords: {e}")
            raise TransportError(str(e)) from e

        description = self._response_text(response, "keyword expansion")
        logger.debug(f"Expanded keywords description: {description}")
        return description

    async def generate_image(self, product_image: ImageAsset, prompt: str) -> types.GenerateContentResponse:
        """
        Generate a restyled product photograph.

        Args:
            product_image: Product photo to restyle
            prompt: Fully composed prompt

        Returns:
            Raw response; may carry image parts, text parts or both
        """
        client = self._get_client()
        logger.info(f"Generating product image with model: {self.image_model}")

        try:
            response = await client.aio.models.generate_content(
                model=self.image_model,
                contents=[image_asset_to_part(product_image), prompt],
                config=types.GenerateContentConfig(
                    response_modalities=["IMAGE", "TEXT"]
                )
            )
        except Exception as e:
            logger.error(f"Error generating product image: {e}")
            raise TransportError(str(e)) from e

        return response
