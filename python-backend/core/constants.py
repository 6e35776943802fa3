"""
Constants and configuration values for the Print Crop service.
Centralizes all magic numbers and message templates.
"""


# Print Target Constants
class PrintConstants:
    """Constants describing the downstream print format."""

    # Long:short edge ratio of the print format
    TARGET_RATIO = 1.4

    # Output resolution
    SHORT_EDGE_PX = 2900
    JPEG_QUALITY = 100

    # Focal point
    DEFAULT_FOCAL = 0.5
    MIN_FOCAL = 0.0
    MAX_FOCAL = 1.0

    # Source assessment
    RATIO_TOLERANCE = 0.1


# Upload Constants
class UploadConstants:
    """Constants for multipart image uploads."""

    MAX_UPLOAD_SIZE_MB = 50
    OUTPUT_FILENAME = "processed-image.jpg"
    OUTPUT_MEDIA_TYPE = "image/jpeg"


# Error Messages
class ErrorMessages:
    """Standard error messages."""

    # Input errors
    NO_IMAGE = "No image file provided"
    IMAGE_TOO_LARGE = "Image upload of {size_mb:.1f} MB exceeds the {limit_mb} MB limit"
    INVALID_REQUEST = "Invalid request"

    # Processing errors
    PROCESSING_FAILED = "Failed to process image: {error}"
    DECODE_FAILED = "Unable to decode image: {error}"
    INVALID_SOURCE_SIZE = "Source dimensions must be positive, got {width}x{height}"
    INVALID_CROP_SIZE = "Computed crop {width}x{height} is not positive"
    INVALID_TARGET_SIZE = "Computed target {width}x{height} is not positive"
    CROP_OUT_OF_BOUNDS = "Crop {crop} exceeds image bounds {width}x{height}"
    RESAMPLE_FAILED = "Resampling failed: {error}"

    # System errors
    SERVICE_NOT_INITIALIZED = "Internal server error: crop service not initialized"
    INTERNAL_ERROR = "Internal server error"


# Warning Messages
class WarningMessages:
    """Advisory messages returned by source inspection."""

    BELOW_TARGET = (
        "Image dimensions ({width}x{height}) are below {target_width}x{target_height}"
        " - will be upscaled"
    )
    RATIO_MISMATCH = "Image ratio ({ratio:.2f}:1) doesn't match {target:.1f}:1 - will be cropped"


# System Constants
class SystemConstants:
    """Constants for system operations."""

    # Logging
    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Server
    SERVICE_NAME = "Print Crop Service"
    VERSION = "1.0.0"
