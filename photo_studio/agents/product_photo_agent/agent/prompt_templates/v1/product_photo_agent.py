"""
Product Photo Agent Prompt Template V1

This module contains the instructions sent to Gemini by the Product Photo Agent:
- the style description request for a reference image
- the keyword expansion request for a short style phrase
- the final product photograph prompt, assembled from the selected style
  parameters and at most one Style Inspiration section
"""

from typing import Optional

from photo_studio.agents.product_photo_agent.agent.schemas import StyleParameters

DESCRIBE_STYLE_PROMPT = """Describe this image's visual style in detail. Focus on the lighting, color palette, mood, composition, texture, and overall aesthetic. Be descriptive and evocative. This description will be used as a prompt for an AI to generate a new product photograph in the same style."""

EXPAND_KEYWORDS_PROMPT = """Based on the following keywords, generate a detailed and evocative visual style description for an AI image generator. The description should be a single paragraph and focus on elements like lighting, color palette, mood, composition, texture, and overall aesthetic. Do not add any preamble like "Here is a description...". Just provide the description itself. Keywords: "{keywords}\""""

BASE_PRODUCT_PHOTO_PROMPT = """Generate a professional, high-quality product photograph of the subject in the provided image. Adhere to the following constraints:
- Aspect Ratio: {aspect_ratio}
- Lighting Style: {lighting_style}
- Camera Perspective: {camera_perspective}"""

STYLE_IMAGE_SECTION = "**Style Inspiration:** Emulate the visual style of the reference image, which is described as: *{description}*."

USER_REFINEMENTS_SECTION = "**User Refinements:** Additionally, apply these specific instructions: *{keywords}*."

KEYWORDS_STYLE_SECTION = "**Style Inspiration:** Emulate the following visual style: *{description}*."


def build_expand_keywords_prompt(keywords: str) -> str:
    return EXPAND_KEYWORDS_PROMPT.format(keywords=keywords)


def build_product_photo_prompt(
        style_parameters: StyleParameters,
        style_image_description: Optional[str] = None,
        user_refinements: Optional[str] = None,
        expanded_keywords_description: Optional[str] = None
) -> str:
    """
    Assemble the final prompt for the image generation call.

    A style image description takes priority over an expanded keyword
    description; user refinements are only attached next to a style image
    description.

    Args:
        style_parameters: Aspect ratio, lighting style and camera perspective
        style_image_description: Style description of the reference image
        user_refinements: Raw user keywords, quoted verbatim
        expanded_keywords_description: Description expanded from the user keywords

    Returns:
        Composed prompt string
    """
    sections = [
        BASE_PRODUCT_PHOTO_PROMPT.format(
            aspect_ratio=style_parameters.aspect_ratio.value,
            lighting_style=style_parameters.lighting_style.value,
            camera_perspective=style_parameters.camera_perspective.value
        )
    ]

    if style_image_description is not None:
        sections.append(STYLE_IMAGE_SECTION.format(description=style_image_description))
        if user_refinements:
            sections.append(USER_REFINEMENTS_SECTION.format(keywords=user_refinements))
    elif expanded_keywords_description is not None:
        sections.append(KEYWORDS_STYLE_SECTION.format(description=expanded_keywords_description))

    return "\n\n".join(sections)
