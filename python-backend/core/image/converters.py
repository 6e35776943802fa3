"""
Image format conversion utilities.

Handles conversions between the formats used by the crop pipeline:
- Raw uploaded bytes -> PIL Images
- PIL Images (RGB format) <-> NumPy arrays (OpenCV BGR format)
- PIL Images -> JPEG bytes
"""

import io
import logging
import struct

import cv2
import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from core.exceptions import ImageDecodeException, ResampleException

logger = logging.getLogger(__name__)

# Modes Pillow can write to JPEG without conversion
JPEG_MODES = ("RGB", "L", "CMYK")


class ImageConverters:
    """Utilities for converting between image formats."""

    @staticmethod
    def decode_image(image_bytes: bytes, auto_orient: bool = True) -> Image.Image:
        """
        Decode uploaded bytes into a fully loaded PIL Image.

        Args:
            image_bytes: Encoded image (JPEG, PNG, WebP, ...)
            auto_orient: If True, apply the EXIF orientation tag

        Returns:
            Decoded PIL Image

        Raises:
            ImageDecodeException: If the bytes are not a readable image
        """
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
            if auto_orient:
                image = ImageOps.exif_transpose(image)
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
            TypeError,
            ValueError,
            struct.error,
        ) as e:
            logger.error(f"Failed to decode image: {e}")
            raise ImageDecodeException(e) from e

        return image

    @staticmethod
    def ensure_rgb(image: Image.Image) -> Image.Image:
        """
        Convert image to a mode JPEG can store.

        Transparent images are flattened onto black.
        """
        if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
            rgba = image.convert("RGBA")
            background = Image.new("RGB", rgba.size, (0, 0, 0))
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background
        if image.mode == "RGB":
            return image
        if image.mode == "L":
            return image.convert("RGB")
        if image.mode.startswith("I;16") or image.mode == "I":
            # Full 16-bit scale, independent of image content
            array = np.asarray(image, dtype=np.float64) / 257.0
            return ImageConverters._gray_to_rgb(array)
        if image.mode == "F":
            # Float samples are normalized to [0, 1]
            array = np.asarray(image, dtype=np.float64) * 255.0
            return ImageConverters._gray_to_rgb(array)
        return image.convert("RGB")

    @staticmethod
    def _gray_to_rgb(array: np.ndarray) -> Image.Image:
        return Image.fromarray(np.clip(np.rint(array), 0, 255).astype(np.uint8)).convert("RGB")

    @staticmethod
    def pil_to_numpy(image: Image.Image, bgr: bool = True) -> np.ndarray:
        """
        Convert PIL Image to NumPy array.

        Args:
            image: PIL Image in RGB mode
            bgr: If True, convert to BGR format (OpenCV), else keep RGB

        Returns:
            NumPy array
        """
        array = np.asarray(image)

        if bgr and array.ndim == 3 and array.shape[2] == 3:
            array = cv2.cvtColor(array, cv2.COLOR_RGB2BGR)

        return array

    @staticmethod
    def numpy_to_pil(image: np.ndarray) -> Image.Image:
        """
        Convert NumPy array (OpenCV format) to PIL Image.

        Args:
            image: NumPy array in BGR format (OpenCV)

        Returns:
            PIL Image in RGB format
        """
        if image.ndim == 3 and image.shape[2] == 3:
            image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)

        return Image.fromarray(image)

    @staticmethod
    def to_jpeg_bytes(image: Image.Image, quality: int = 100) -> bytes:
        """
        Encode image as JPEG.

        Args:
            image: PIL Image
            quality: JPEG quality (1-100)

        Returns:
            JPEG bytes

        Raises:
            ResampleException: If the encoder fails
        """
        if image.mode not in JPEG_MODES:
            image = ImageConverters.ensure_rgb(image)

        buffer = io.BytesIO()
        try:
            image.save(buffer, format="JPEG", quality=quality, optimize=True)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to encode JPEG: {e}")
            raise ResampleException(e) from e

        return buffer.getvalue()


decode_image = ImageConverters.decode_image
ensure_rgb = ImageConverters.ensure_rgb
pil_to_numpy = ImageConverters.pil_to_numpy
numpy_to_pil = ImageConverters.numpy_to_pil
to_jpeg_bytes = ImageConverters.to_jpeg_bytes
