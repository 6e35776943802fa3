"""
Image processing operations.

Handles the resample stage of the crop pipeline:
- Crop extraction
- Lanczos resize (Pillow or OpenCV)
- JPEG rendering
"""

import logging
from typing import Union

import cv2
from PIL import Image

from core.constants import ErrorMessages, PrintConstants
from core.enums import ResampleEngine
from core.exceptions import CropGeometryException, ResampleException
from core.image.converters import (
    decode_image,
    ensure_rgb,
    numpy_to_pil,
    pil_to_numpy,
    to_jpeg_bytes,
)
from core.image.geometry import CropRect, TargetSize

logger = logging.getLogger(__name__)


def extract_crop(image: Image.Image, crop: CropRect) -> Image.Image:
    """
    Extract the crop rectangle from an image.

    Args:
        image: Source PIL Image
        crop: Rectangle to extract, must lie inside the image

    Returns:
        Cropped PIL Image

    Raises:
        CropGeometryException: If the rectangle leaves the image bounds
    """
    if crop.width <= 0 or crop.height <= 0:
        raise CropGeometryException(
            ErrorMessages.INVALID_CROP_SIZE.format(width=crop.width, height=crop.height)
        )

    if not crop.fits_within(image.width, image.height):
        raise CropGeometryException(
            ErrorMessages.CROP_OUT_OF_BOUNDS.format(
                crop=crop.to_dict(), width=image.width, height=image.height
            )
        )

    return image.crop(crop.box)


def resize_to_target(
    image: Image.Image,
    target: TargetSize,
    engine: Union[ResampleEngine, str] = ResampleEngine.PILLOW,
) -> Image.Image:
    """
    Resize image to exactly the target size with a Lanczos filter.

    Enlargement is allowed; aspect ratio is not preserved beyond what the
    crop already guarantees.

    Raises:
        ResampleException: If the underlying library fails
    """
    size = (target.width, target.height)
    try:
        if ResampleEngine(engine) == ResampleEngine.OPENCV:
            array = pil_to_numpy(image)
            resized = cv2.resize(array, size, interpolation=cv2.INTER_LANCZOS4)
            return numpy_to_pil(resized)

        return image.resize(size, Image.Resampling.LANCZOS)

    except (cv2.error, OSError, ValueError, MemoryError) as e:
        logger.error(f"Failed to resize to {target.width}x{target.height}: {e}")
        raise ResampleException(e) from e


def render_image(
    image: Image.Image,
    crop: CropRect,
    target: TargetSize,
    quality: int = PrintConstants.JPEG_QUALITY,
    engine: Union[ResampleEngine, str] = ResampleEngine.PILLOW,
) -> bytes:
    """Crop, resize and JPEG-encode an already decoded image."""
    cropped = ensure_rgb(extract_crop(image, crop))
    resized = resize_to_target(cropped, target, engine=engine)
    return to_jpeg_bytes(resized, quality=quality)


def render(
    image_bytes: bytes,
    crop: CropRect,
    target: TargetSize,
    quality: int = PrintConstants.JPEG_QUALITY,
    engine: Union[ResampleEngine, str] = ResampleEngine.PILLOW,
    auto_orient: bool = True,
) -> bytes:
    """
    Produce the print derivative from encoded image bytes.

    Args:
        image_bytes: Encoded source image
        crop: Rectangle to extract from the source
        target: Output size
        quality: JPEG quality (1-100)
        engine: Resize backend
        auto_orient: If True, apply the EXIF orientation tag before cropping

    Returns:
        JPEG bytes of size ``target``
    """
    image = decode_image(image_bytes, auto_orient=auto_orient)
    return render_image(image, crop, target, quality=quality, engine=engine)
