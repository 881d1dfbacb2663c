"""Exceptions raised by the product photo workflow."""

from typing import List, Optional


class ProductPhotoError(Exception):
    """Base class for every error the product photo workflow surfaces."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(ProductPhotoError):
    """A required setting (the Gemini API key) is missing."""


class InvalidInputError(ProductPhotoError):
    """The request was rejected before any remote call was made."""


class TransportError(ProductPhotoError):
    """A remote call failed (network, quota, malformed response)."""


class NoImageProducedError(ProductPhotoError):
    """The generation call completed but returned no image part."""

    DEFAULT_MESSAGE = "No image was generated. The model may have refused the request."

    def __init__(
            self,
            message: str = DEFAULT_MESSAGE,
            model_text: Optional[List[str]] = None,
            block_reason: Optional[str] = None
    ):
        super().__init__(message)
        self.model_text = model_text or []
        self.block_reason = block_reason


class SessionBusyError(ProductPhotoError):
    """A generation was submitted while another one is still running."""
