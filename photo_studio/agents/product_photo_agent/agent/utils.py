"""Utility functions for the Product Photo Agent."""

import base64
import io
from typing import Any, List, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError
from google.genai import types

from photo_studio.agents.product_photo_agent.agent.exceptions import InvalidInputError, NoImageProducedError
from photo_studio.agents.product_photo_agent.agent.schemas import GenerationResult, ImageAsset
from photo_studio.enums.product_photo import ImageOrigin

DOWNLOAD_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
    "image/gif": "gif",
}


def image_asset_to_part(image: ImageAsset) -> types.Part:
    """
    Wrap an image asset as an inline-data part for the Gemini API.

    Args:
        image: Image asset to send

    Returns:
        Part carrying the raw bytes and MIME type
    """
    return types.Part.from_bytes(data=image.data, mime_type=image.mime_type)


def ensure_decodable_image(data: bytes) -> None:
    """
    Check that uploaded bytes decode as an image.

    Args:
        data: Raw uploaded bytes

    Raises:
        InvalidInputError: If Pillow cannot identify the payload as an image, or its pixel count is too large
    """
    try:
        with Image.open(io.BytesIO(data)) as im:
            im.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        raise InvalidInputError("The uploaded file is not a readable image.") from e


def build_data_uri(mime_type: str, payload: Union[bytes, str]) -> str:
    """
    Build a data URI from a MIME type and image payload.

    Args:
        mime_type: MIME type of the image (e.g., "image/png")
        payload: Raw bytes, or a string that is already base64-encoded

    Returns:
        Data URI string, "data:<mime>;base64,<payload>"
    """
    if isinstance(payload, bytes):
        payload = base64.b64encode(payload).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def parse_data_uri(data_uri: str) -> Tuple[str, bytes]:
    """
    Split a base64 data URI back into MIME type and raw bytes.

    Raises:
        ValueError: If the string is not a base64 data URI
    """
    header, sep, payload = data_uri.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URI")
    mime_type = header[len("data:"):-len(";base64")]
    return mime_type, base64.b64decode(payload)


def result_to_image_asset(result: GenerationResult) -> ImageAsset:
    """Decode a generation result back into an image asset produced by the service."""
    mime_type, data = parse_data_uri(result.data_uri)
    return ImageAsset(data=data, mime_type=mime_type, origin=ImageOrigin.GENERATED)


def extension_for_mime_type(mime_type: str) -> str:
    """File extension used when offering an image for download."""
    return DOWNLOAD_EXTENSIONS.get(mime_type, "png")


def _response_parts(response: Any) -> List[Any]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])


def _block_reason(response: Any) -> Optional[str]:
    feedback = getattr(response, "prompt_feedback", None)
    reason = getattr(feedback, "block_reason", None) if feedback else None
    if reason is None:
        return None
    return getattr(reason, "value", None) or str(reason)


def extract_generated_image(response: Any, prompt: Optional[str] = None) -> GenerationResult:
    """
    Find the first inline image part of a generate_content response.

    Args:
        response: Raw GenerateContentResponse (text and image parts mixed)
        prompt: Composed prompt that produced the response, kept for reference

    Returns:
        GenerationResult with the image as a data URI

    Raises:
        NoImageProducedError: If no part carries inline image data
    """
    parts = _response_parts(response)
    model_text = [part.text for part in parts if getattr(part, "text", None)]

    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None and inline_data.data:
            mime_type = inline_data.mime_type or "image/png"
            return GenerationResult(
                data_uri=build_data_uri(mime_type, inline_data.data),
                mime_type=mime_type,
                prompt=prompt,
                model_text=model_text
            )

    raise NoImageProducedError(model_text=model_text, block_reason=_block_reason(response))
