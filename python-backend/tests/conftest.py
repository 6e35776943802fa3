"""
Pytest configuration and fixtures for Print Crop tests
"""

import io

import cv2
import numpy as np
import pytest
from PIL import Image

from config import ImageSettings
from services.crop_service import CropService

# Small print target keeps rendering fast: 140x100 / 100x140
TEST_SHORT_EDGE = 100


def encode(image: np.ndarray, ext: str = ".png") -> bytes:
    """Encode an OpenCV image to bytes"""
    ok, buffer = cv2.imencode(ext, image)
    assert ok
    return buffer.tobytes()


def decode_size(data: bytes):
    """(width, height) of encoded image bytes"""
    with Image.open(io.BytesIO(data)) as image:
        return image.size


@pytest.fixture
def test_image():
    """Create a 640x480 landscape test image"""
    image = np.zeros((480, 640, 3), dtype=np.uint8)
    # Add some content
    cv2.rectangle(image, (100, 100), (300, 300), (255, 255, 255), -1)
    cv2.circle(image, (450, 350), 50, (128, 128, 128), -1)
    return image


@pytest.fixture
def landscape_png(test_image):
    """640x480 landscape image as PNG bytes"""
    return encode(test_image)


@pytest.fixture
def portrait_jpeg():
    """300x600 portrait image as JPEG bytes"""
    image = np.full((600, 300, 3), 200, dtype=np.uint8)
    cv2.circle(image, (150, 300), 80, (0, 128, 255), -1)
    return encode(image, ".jpg")


@pytest.fixture
def split_image():
    """600x300 image, left half red and right half blue (BGR)"""
    image = np.zeros((300, 600, 3), dtype=np.uint8)
    image[:, :300] = (0, 0, 255)
    image[:, 300:] = (255, 0, 0)
    return image


@pytest.fixture
def split_png(split_image):
    """Red/blue split image as PNG bytes"""
    return encode(split_image)


@pytest.fixture
def rgba_png():
    """Semi-transparent 200x100 RGBA PNG"""
    image = np.zeros((100, 200, 4), dtype=np.uint8)
    image[..., 1] = 255
    image[..., 3] = 128
    return encode(image)


@pytest.fixture
def corrupt_bytes():
    """Bytes that are not an image"""
    return b"this is definitely not an image" * 10


@pytest.fixture
def image_settings():
    """Image settings with a small print target"""
    return ImageSettings(short_edge=TEST_SHORT_EDGE)


@pytest.fixture
def crop_service(image_settings):
    """Create CropService instance for testing"""
    return CropService(image_settings)
