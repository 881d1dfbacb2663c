from typing import Dict, List

from pydantic import BaseModel, Field

from photo_studio.enums.product_photo import SessionState


class ImageSlotResponse(BaseModel):
    """An image currently held in one of the studio slots."""
    slot: str = Field(..., description="'product' or 'style'")
    preview_id: str = Field(..., description="Handle under which the preview is served")
    mime_type: str
    size_bytes: int


class GenerationResponse(BaseModel):
    """A generated product photograph."""
    image_data_uri: str = Field(..., description="data:<mime>;base64,<payload>")
    mime_type: str
    prompt: str | None = Field(None, description="Prompt sent to the image model")
    model_text: List[str] = Field(default_factory=list, description="Text the model returned with the image")


class StudioStateResponse(BaseModel):
    """Current inputs and lifecycle state of the studio session."""
    state: SessionState
    product_image: ImageSlotResponse | None = None
    style_image: ImageSlotResponse | None = None
    keywords: str
    aspect_ratio: str
    lighting_style: str
    camera_perspective: str
    error: str | None = None
    has_result: bool


class StyleOptionsResponse(BaseModel):
    """The fixed option sets of the three style selectors."""
    aspect_ratios: List[str]
    lighting_styles: List[str]
    camera_perspectives: List[str]
    defaults: Dict[str, str]
