"""Schemas for the Product Photo Agent."""

import base64
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from photo_studio.agents.product_photo_agent.agent.exceptions import InvalidInputError
from photo_studio.enums.product_photo import AspectRatio, CameraPerspective, ImageOrigin, LightingStyle

ALLOWED_UPLOAD_MIME_TYPES = ("image/png", "image/jpeg", "image/webp")


class ImageAsset(BaseModel):
    """Image payload plus declared MIME type and provenance."""
    data: bytes
    mime_type: str
    origin: ImageOrigin = ImageOrigin.UPLOADED

    @field_validator("mime_type")
    @classmethod
    def normalize_mime_type(cls, value: str) -> str:
        return value.split(";")[0].strip().lower()

    @model_validator(mode="after")
    def check_upload(self) -> "ImageAsset":
        if self.origin == ImageOrigin.UPLOADED:
            if self.mime_type not in ALLOWED_UPLOAD_MIME_TYPES:
                raise ValueError(
                    f"Unsupported image type '{self.mime_type}'. Please upload a PNG, JPG, or WEBP image."
                )
            if not self.data:
                raise ValueError("The uploaded image is empty.")
        return self

    @classmethod
    def from_upload(cls, data: bytes, mime_type: Optional[str]) -> "ImageAsset":
        """Build an uploaded asset, raising InvalidInputError instead of a pydantic error."""
        try:
            return cls(data=data, mime_type=mime_type or "", origin=ImageOrigin.UPLOADED)
        except ValidationError as e:
            err = e.errors()[0]
            raise InvalidInputError(str(err.get("ctx", {}).get("error", err["msg"]))) from e

    @property
    def size(self) -> int:
        return len(self.data)

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


class StyleParameters(BaseModel):
    """The three enumerated composition choices, always one value per axis."""
    model_config = ConfigDict(frozen=True)

    aspect_ratio: AspectRatio = AspectRatio.SQUARE
    lighting_style: LightingStyle = LightingStyle.STUDIO
    camera_perspective: CameraPerspective = CameraPerspective.EYE_LEVEL


class GenerationRequest(BaseModel):
    """Everything one compose-and-generate run needs."""
    product_image: Optional[ImageAsset] = None
    style_image: Optional[ImageAsset] = None
    keywords: Optional[str] = None
    style_parameters: StyleParameters = Field(default_factory=StyleParameters)

    @field_validator("keywords")
    @classmethod
    def strip_keywords(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None


class GenerationResult(BaseModel):
    """A successfully generated image, as a self-describing data URI."""
    data_uri: str
    mime_type: str
    prompt: Optional[str] = None
    model_text: List[str] = Field(default_factory=list)

