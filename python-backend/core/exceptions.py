"""
Exception hierarchy for the Print Crop service.

These carry an HTTP status and render as ``{"error": "<message>"}`` but
have no web framework dependency; handlers live in ``api.exceptions``.
"""

from typing import Any, Dict, Optional

from core.constants import ErrorMessages


class PrintCropException(Exception):
    """Base exception for all crop pipeline errors"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Render as the JSON error body."""
        if self.status_code >= 500:
            content = {"error": ErrorMessages.PROCESSING_FAILED.format(error=self.message)}
        else:
            content = {"error": self.message}
        if self.details:
            content["details"] = self.details
        return content


class ImageMissingException(PrintCropException):
    """No image file, or an empty payload, was supplied"""

    status_code = 400

    def __init__(self, message: str = ErrorMessages.NO_IMAGE):
        super().__init__(message)


class ImageTooLargeException(PrintCropException):
    """Upload exceeds the configured size limit"""

    status_code = 413

    def __init__(self, size_bytes: int, limit_mb: int):
        super().__init__(
            ErrorMessages.IMAGE_TOO_LARGE.format(
                size_mb=size_bytes / (1024 * 1024), limit_mb=limit_mb
            ),
            details={"size_bytes": size_bytes, "limit_mb": limit_mb},
        )


class ImageDecodeException(PrintCropException):
    """Image bytes are corrupt or in an unsupported format"""

    def __init__(self, error: Any):
        super().__init__(ErrorMessages.DECODE_FAILED.format(error=error))


class CropGeometryException(PrintCropException):
    """A computed crop or target dimension is invalid"""


class ResampleException(PrintCropException):
    """The underlying image library failed while resizing or encoding"""

    def __init__(self, error: Any):
        super().__init__(ErrorMessages.RESAMPLE_FAILED.format(error=error))
