"""
Prompt template unit tests
"""

import pytest

from photo_studio.agents.product_photo_agent.agent.prompt_templates.v1.product_photo_agent import \
    BASE_PRODUCT_PHOTO_PROMPT, build_expand_keywords_prompt, build_product_photo_prompt
from photo_studio.agents.product_photo_agent.agent.schemas import StyleParameters
from photo_studio.enums.product_photo import AspectRatio, CameraPerspective, LightingStyle

BASE_TEXT = (
    "Generate a professional, high-quality product photograph of the subject in the provided image. "
    "Adhere to the following constraints:\n"
    "- Aspect Ratio: 16:9\n"
    "- Lighting Style: Cinematic\n"
    "- Camera Perspective: Low-angle"
)


@pytest.mark.unit
class TestBuildProductPhotoPrompt:

    @pytest.fixture
    def params(self):
        return StyleParameters(
            aspect_ratio=AspectRatio.WIDESCREEN,
            lighting_style=LightingStyle.CINEMATIC,
            camera_perspective=CameraPerspective.LOW_ANGLE
        )

    def test_base_only(self, params):
        assert build_product_photo_prompt(params) == BASE_TEXT

    def test_default_parameters_render_labels(self):
        prompt = build_product_photo_prompt(StyleParameters())
        assert prompt == BASE_PRODUCT_PHOTO_PROMPT.format(
            aspect_ratio="1:1", lighting_style="Studio", camera_perspective="Eye-level"
        )

    def test_style_image_description_with_refinements(self, params):
        prompt = build_product_photo_prompt(
            params,
            style_image_description="soft pastel light",
            user_refinements="add a eucalyptus sprig"
        )
        assert prompt == (
            BASE_TEXT
            + "\n\n**Style Inspiration:** Emulate the visual style of the reference image, "
              "which is described as: *soft pastel light*."
            + "\n\n**User Refinements:** Additionally, apply these specific instructions: "
              "*add a eucalyptus sprig*."
        )

    def test_style_image_description_without_refinements(self, params):
        prompt = build_product_photo_prompt(params, style_image_description="soft pastel light")
        assert prompt.endswith("which is described as: *soft pastel light*.")
        assert "User Refinements" not in prompt

    def test_expanded_keywords_description(self, params):
        prompt = build_product_photo_prompt(params, expanded_keywords_description="moody slate backdrop")
        assert prompt == BASE_TEXT + "\n\n**Style Inspiration:** Emulate the following visual style: *moody slate backdrop*."

    def test_style_image_description_takes_priority(self, params):
        prompt = build_product_photo_prompt(
            params,
            style_image_description="from the image",
            expanded_keywords_description="from the keywords"
        )
        assert "from the image" in prompt
        assert "from the keywords" not in prompt
        assert prompt.count("**Style Inspiration:**") == 1

    def test_refinements_ignored_without_style_image(self, params):
        prompt = build_product_photo_prompt(params, user_refinements="bright")
        assert prompt == BASE_TEXT


@pytest.mark.unit
def test_expand_keywords_prompt_quotes_keywords():
    prompt = build_expand_keywords_prompt("dark and moody, dramatic shadows")
    assert prompt.endswith('Keywords: "dark and moody, dramatic shadows"')
    assert "single paragraph" in prompt
