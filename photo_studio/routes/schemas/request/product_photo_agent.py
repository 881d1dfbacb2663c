from pydantic import BaseModel, Field

from photo_studio.agents.product_photo_agent.agent.schemas import StyleParameters
from photo_studio.enums.product_photo import AspectRatio, CameraPerspective, LightingStyle


class StyleOptionsRequest(BaseModel):
    """Style keywords and composition choices for one generation."""
    keywords: str | None = Field(None, description="Style prompt / keywords (optional)")
    aspect_ratio: AspectRatio = Field(AspectRatio.SQUARE, description="Aspect ratio of the generated photo")
    lighting_style: LightingStyle = Field(LightingStyle.STUDIO, description="Lighting style of the generated photo")
    camera_perspective: CameraPerspective = Field(CameraPerspective.EYE_LEVEL,
                                                  description="Camera perspective of the generated photo")

    def to_style_parameters(self) -> StyleParameters:
        return StyleParameters(
            aspect_ratio=self.aspect_ratio,
            lighting_style=self.lighting_style,
            camera_perspective=self.camera_perspective
        )


class GenerateStudioImageRequest(StyleOptionsRequest):
    """Request to generate from the images currently held by the studio session."""


class GenerateProductPhotoRequest(StyleOptionsRequest):
    """Self-contained generation request carrying its images as base64."""
    product_image_base64: str | None = Field(None, description="Base64-encoded product image (required)")
    product_image_mime_type: str | None = Field(None, description="MIME type of the product image (e.g., 'image/png')")
    style_image_base64: str | None = Field(None, description="Base64-encoded style reference image")
    style_image_mime_type: str | None = Field(None, description="MIME type of the style reference image")
