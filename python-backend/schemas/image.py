"""
Image processing API models.

This module contains models for crop operations:
- Crop plans for the preview overlay
- Source inspection results
- Error bodies
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from core.enums import Orientation
from core.image.geometry import CropPlan

from .common import CropBox, FocalPoint, Size


class CropPlanResponse(BaseModel):
    """Crop geometry computed for a source size"""

    source: Size
    orientation: Orientation
    focal_point: FocalPoint
    crop: CropBox
    target: Size
    upscaled: bool = Field(..., description="True if the crop is enlarged to reach the target")

    @classmethod
    def from_plan(cls, plan: CropPlan) -> "CropPlanResponse":
        return cls(
            source=Size(width=plan.source_width, height=plan.source_height),
            orientation=plan.orientation,
            focal_point=FocalPoint(x=plan.focal_x, y=plan.focal_y),
            crop=CropBox.from_dict(plan.crop.to_dict()),
            target=Size(**plan.target.to_dict()),
            upscaled=plan.upscales,
        )


class ImageInspectionResponse(CropPlanResponse):
    """Crop plan for an uploaded image together with advisory warnings"""

    warnings: List[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body returned on failure"""

    error: str
    details: Optional[Any] = None
