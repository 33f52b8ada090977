"""User-facing errors of the enhancement pipeline."""

from typing import Optional


class EnhancementError(Exception):
    """Base error. ``message`` is safe to show to the user."""

    error_type = "processing_error"
    default_message = "Failed to enhance the image. The AI may be busy or the image could not be processed."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class EncodingError(EnhancementError):
    """The uploaded file could not be turned into a base64 payload."""

    error_type = "encoding"
    default_message = "Failed to convert file to base64 string."


class NoCandidatesError(EnhancementError):
    error_type = "no_candidates"
    default_message = "AI did not return any candidates. The image might be restricted."


class NoImageError(EnhancementError):
    error_type = "no_image"
    default_message = "No image was returned by the AI. Please try a different photo."


class InvalidAPIKeyError(EnhancementError):
    error_type = "invalid_api_key"
    default_message = "Invalid API Key. Please check your configuration."


class EnhancementFailedError(EnhancementError):
    """Catch-all for transport and processing failures."""


class UnsupportedFileError(ValueError):
    """Upload is not an image."""

    def __init__(self, message: str = "Please upload a valid image file (PNG, JPG, etc.)."):
        self.message = message
        super().__init__(message)
