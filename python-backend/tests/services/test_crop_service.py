"""
Tests for CropService
"""

import io

import pytest
from PIL import Image

from config import ImageSettings
from core.enums import Orientation, PlacementPolicy, ResampleEngine
from core.exceptions import (
    ImageDecodeException,
    ImageMissingException,
    ImageTooLargeException,
)
from schemas import FocalPoint
from services.crop_service import CropService


def image_size(data: bytes):
    with Image.open(io.BytesIO(data)) as image:
        return image.size


class TestCropService:
    """Test CropService functionality"""

    def test_process_landscape(self, crop_service, landscape_png):
        result = crop_service.process_image(landscape_png)

        assert image_size(result.content) == (140, 100)
        assert result.plan.orientation == Orientation.HORIZONTAL
        assert (result.plan.crop.width, result.plan.crop.height) == (640, 457)

    def test_process_portrait(self, crop_service, portrait_jpeg):
        result = crop_service.process_image(portrait_jpeg)

        assert image_size(result.content) == (100, 140)
        assert result.plan.crop.to_dict() == {"left": 0, "top": 90, "width": 300, "height": 420}

    def test_focal_point_moves_crop(self, crop_service, split_png):
        left = crop_service.process_image(split_png, FocalPoint(x=0.0, y=0.5))
        right = crop_service.process_image(split_png, FocalPoint(x=1.0, y=0.5))

        assert left.plan.crop.left == 0
        assert right.plan.crop.left == 180

    def test_default_focal_is_center(self, crop_service, split_png):
        result = crop_service.process_image(split_png)
        assert result.plan.crop.left == 90
        assert (result.plan.focal_x, result.plan.focal_y) == (0.5, 0.5)

    @pytest.mark.parametrize("payload", [None, b""])
    def test_missing_payload(self, crop_service, payload):
        with pytest.raises(ImageMissingException) as exc_info:
            crop_service.process_image(payload)
        assert exc_info.value.status_code == 400
        assert exc_info.value.to_dict() == {"error": "No image file provided"}

    def test_payload_too_large(self):
        service = CropService(ImageSettings(max_upload_mb=1))
        with pytest.raises(ImageTooLargeException) as exc_info:
            service.process_image(b"\x00" * (1024 * 1024 + 1))
        assert exc_info.value.status_code == 413

    def test_corrupt_payload(self, crop_service, corrupt_bytes):
        with pytest.raises(ImageDecodeException) as exc_info:
            crop_service.process_image(corrupt_bytes)
        assert exc_info.value.status_code == 500
        assert exc_info.value.to_dict()["error"].startswith("Failed to process image: ")

    def test_service_survives_failures(self, crop_service, corrupt_bytes, landscape_png):
        """A failed request does not affect the next one"""
        with pytest.raises(ImageDecodeException):
            crop_service.process_image(corrupt_bytes)
        assert crop_service.process_image(landscape_png).content

    def test_opencv_engine(self, landscape_png):
        service = CropService(ImageSettings(short_edge=100, resample_engine=ResampleEngine.OPENCV))
        assert image_size(service.process_image(landscape_png).content) == (140, 100)

    def test_default_settings_render_print_size(self, portrait_jpeg):
        result = CropService().process_image(portrait_jpeg)
        assert image_size(result.content) == (2900, 4060)


class TestPlanning:
    """Test planning without rendering"""

    def test_plan_for_size(self, crop_service):
        plan = crop_service.plan_for_size(4000, 3000)
        assert plan.crop.to_dict() == {"left": 0, "top": 72, "width": 4000, "height": 2857}
        assert plan.target.to_dict() == {"width": 140, "height": 100}

    def test_configured_policy(self):
        service = CropService(ImageSettings(placement_policy=PlacementPolicy.CENTERED))
        plan = service.plan_for_size(3000, 1000, FocalPoint(x=0.0, y=0.0))
        assert plan.crop.left == 800

    def test_policy_override(self, crop_service):
        plan = crop_service.plan_for_size(
            3000, 1000, FocalPoint(x=0.0, y=0.0), policy=PlacementPolicy.CENTERED
        )
        assert plan.crop.left == 800

    def test_inspect_image(self, crop_service, landscape_png):
        result = crop_service.inspect_image(landscape_png, FocalPoint(x=1.0, y=1.0))

        assert result.plan.crop.to_dict() == {"left": 0, "top": 23, "width": 640, "height": 457}
        # 640x480 is above the 140x100 test target, ratio 1.33 is within tolerance
        assert result.warnings == []

    def test_inspect_warns_on_ratio(self, crop_service, portrait_jpeg):
        result = crop_service.inspect_image(portrait_jpeg)
        assert len(result.warnings) == 1
        assert "2.00:1" in result.warnings[0]

    def test_inspect_upscale_warning_at_print_size(self, landscape_png):
        result = CropService().inspect_image(landscape_png)
        assert any("upscaled" in w for w in result.warnings)
        assert result.plan.upscales

    def test_inspect_respects_exif_orientation(self, crop_service):
        exif = Image.Exif()
        exif[0x0112] = 6
        buffer = io.BytesIO()
        Image.new("RGB", (300, 200)).save(buffer, format="JPEG", exif=exif)

        result = crop_service.inspect_image(buffer.getvalue())
        assert result.plan.orientation == Orientation.VERTICAL

        unrotated = CropService(ImageSettings(auto_orient=False)).inspect_image(buffer.getvalue())
        assert unrotated.plan.orientation == Orientation.HORIZONTAL
