"""
Crop Service - Business logic for print crop operations.

Turns an uploaded image and a focal point into the print derivative:
validate payload, decode, plan the crop, resample and encode. The service
holds only immutable settings, so one instance is shared by all requests
and may be called concurrently from worker threads.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from PIL import Image

from config import ImageSettings
from core.enums import PlacementPolicy
from core.exceptions import ImageMissingException, ImageTooLargeException
from core.image.converters import decode_image
from core.image.geometry import CropPlan, assess_source, build_crop_plan
from core.image.processors import render_image
from core.utils.decorators import timer
from schemas import FocalPoint

logger = logging.getLogger(__name__)


@dataclass
class ProcessedImage:
    """Rendered JPEG and the plan that produced it"""

    content: bytes
    plan: CropPlan


@dataclass
class InspectionResult:
    """Plan and advisory warnings for an uploaded image"""

    plan: CropPlan
    warnings: List[str] = field(default_factory=list)


class CropService:
    """
    Service for print crop operations.

    Wraps the pure crop geometry and resample functions with payload
    validation, configuration and logging.
    """

    def __init__(self, settings: Optional[ImageSettings] = None):
        """
        Initialize crop service.

        Args:
            settings: Image settings, defaults if omitted
        """
        self.settings = settings or ImageSettings()

    def validate_payload(self, image_bytes: Optional[bytes]) -> bytes:
        """
        Check that an upload is present, non-empty and within the size limit.

        Raises:
            ImageMissingException: If there is no payload
            ImageTooLargeException: If the payload exceeds ``max_upload_mb``
        """
        if not image_bytes:
            raise ImageMissingException()

        if len(image_bytes) > self.settings.max_upload_bytes:
            raise ImageTooLargeException(len(image_bytes), self.settings.max_upload_mb)

        return image_bytes

    def plan_for_size(
        self,
        width: int,
        height: int,
        focal: Optional[FocalPoint] = None,
        policy: Optional[PlacementPolicy] = None,
    ) -> CropPlan:
        """
        Crop plan for a source of the given size.

        Args:
            width: Source width in pixels
            height: Source height in pixels
            focal: Focal point, image center if omitted
            policy: Placement policy, configured default if omitted

        Returns:
            CropPlan
        """
        focal = focal or FocalPoint()
        return build_crop_plan(
            width,
            height,
            focal_x=focal.x,
            focal_y=focal.y,
            policy=policy or self.settings.placement_policy,
            short_edge=self.settings.short_edge,
            ratio=self.settings.target_ratio,
        )

    def _decode(self, image_bytes: Optional[bytes]) -> Image.Image:
        image_bytes = self.validate_payload(image_bytes)
        logger.info(f"Received image payload of {len(image_bytes)} bytes")
        return decode_image(image_bytes, auto_orient=self.settings.auto_orient)

    @timer
    def process_image(
        self, image_bytes: Optional[bytes], focal: Optional[FocalPoint] = None
    ) -> ProcessedImage:
        """
        Render the print derivative of an uploaded image.

        Args:
            image_bytes: Encoded source image
            focal: Focal point, image center if omitted

        Returns:
            ProcessedImage with JPEG bytes and the crop plan

        Raises:
            ImageMissingException: No payload
            ImageTooLargeException: Payload over the size limit
            ImageDecodeException: Unreadable image
            CropGeometryException: Invalid crop geometry
            ResampleException: Resize or encode failure
        """
        focal = focal or FocalPoint()
        image = self._decode(image_bytes)
        logger.info(
            f"Decoded {image.width}x{image.height} {image.mode} image, "
            f"focal point ({focal.x:.3f}, {focal.y:.3f})"
        )

        plan = self.plan_for_size(image.width, image.height, focal)
        logger.info(
            f"Crop parameters: {plan.crop.to_dict()} -> "
            f"{plan.target.width}x{plan.target.height} ({plan.orientation.value})"
        )

        content = render_image(
            image,
            plan.crop,
            plan.target,
            quality=self.settings.jpeg_quality,
            engine=self.settings.resample_engine,
        )
        logger.info(f"Image processed successfully ({len(content)} bytes)")

        return ProcessedImage(content=content, plan=plan)

    @timer
    def inspect_image(
        self, image_bytes: Optional[bytes], focal: Optional[FocalPoint] = None
    ) -> InspectionResult:
        """
        Plan the crop for an uploaded image without rendering it.

        Returns:
            InspectionResult with the plan and advisory warnings
        """
        image = self._decode(image_bytes)
        plan = self.plan_for_size(image.width, image.height, focal)
        warnings = assess_source(
            image.width,
            image.height,
            short_edge=self.settings.short_edge,
            ratio=self.settings.target_ratio,
        )
        for warning in warnings:
            logger.info(f"Inspection warning: {warning}")

        return InspectionResult(plan=plan, warnings=warnings)
