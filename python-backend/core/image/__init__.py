"""
Image processing utilities - modular architecture.

This package provides focused image processing utilities:
- converters: Format conversions (bytes, PIL, NumPy, JPEG)
- geometry: Crop planning for the 1.4:1 print target
- processors: Crop extraction, Lanczos resize and JPEG rendering
"""

from core.image.converters import ImageConverters
from core.image.geometry import (
    CropPlan,
    CropRect,
    TargetSize,
    assess_source,
    build_crop_plan,
    plan,
)
from core.image.processors import render, render_image

__all__ = [
    "ImageConverters",
    "CropPlan",
    "CropRect",
    "TargetSize",
    "assess_source",
    "build_crop_plan",
    "plan",
    "render",
    "render_image",
]
