"""Service composing the product photo prompt and running the generation pipeline."""

from loguru import logger

from photo_studio.agents.product_photo_agent.agent.exceptions import InvalidInputError
from photo_studio.agents.product_photo_agent.agent.product_photo_agent import ProductPhotoAgent
from photo_studio.agents.product_photo_agent.agent.prompt_templates.v1.product_photo_agent import \
    build_product_photo_prompt
from photo_studio.agents.product_photo_agent.agent.schemas import GenerationRequest, GenerationResult
from photo_studio.agents.product_photo_agent.agent.utils import extract_generated_image
from photo_studio.enums.product_photo import StyleSource


def select_style_source(request: GenerationRequest) -> StyleSource:
    """Pick the input that feeds the Style Inspiration section; a style image wins over keywords."""
    if request.style_image is not None:
        return StyleSource.STYLE_IMAGE
    if request.keywords:
        return StyleSource.KEYWORDS
    return StyleSource.NONE


class ProductPhotoAgentService:
    """Service running describe/expand, prompt composition and image generation in order."""

    def __init__(self, product_photo_agent: ProductPhotoAgent):
        self.product_photo_agent = product_photo_agent

    def validate_request(self, request: GenerationRequest) -> None:
        if request.product_image is None:
            raise InvalidInputError("Please upload a product image.")

    async def compose_prompt(self, request: GenerationRequest) -> str:
        """
        Build the final prompt, calling at most one of describe_style / expand_keywords.

        Args:
            request: Validated generation request

        Returns:
            Composed prompt string
        """
        style_source = select_style_source(request)
        logger.info(f"Composing prompt with style source: {style_source.value}")

        if style_source == StyleSource.STYLE_IMAGE:
            description = await self.product_photo_agent.describe_style(request.style_image)
            prompt = build_product_photo_prompt(
                request.style_parameters,
                style_image_description=description,
                user_refinements=request.keywords
            )
        elif style_source == StyleSource.KEYWORDS:
            description = await self.product_photo_agent.expand_keywords(request.keywords)
            prompt = build_product_photo_prompt(
                request.style_parameters,
                expanded_keywords_description=description
            )
        else:
            prompt = build_product_photo_prompt(request.style_parameters)

        logger.debug(f"Composed prompt: {prompt}")
        return prompt

    async def compose_and_generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Run the whole workflow for one request.

        Args:
            request: Generation request

        Returns:
            GenerationResult holding the generated image as a data URI

        Raises:
            InvalidInputError: Product image missing (no remote call is made)
            ConfigurationError: GEMINI_API_KEY is not set
            TransportError: Any remote call failed
            NoImageProducedError: The model answered without an image
        """
        self.validate_request(request)

        prompt = await self.compose_prompt(request)
        response = await self.product_photo_agent.generate_image(request.product_image, prompt)

        try:
            result = extract_generated_image(response, prompt=prompt)
        except Exception as e:
            logger.error(f"Error extracting generated image: {e}")
            raise

        logger.info(f"Successfully generated product image ({result.mime_type})")
        return result
