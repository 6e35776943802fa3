"""
Schemas Package

Pydantic schemas for validation and serialization of API payloads.
"""

from .common import CropBox, FocalPoint, Size
from .image import CropPlanResponse, ErrorResponse, ImageInspectionResponse

__all__ = [
    "CropBox",
    "FocalPoint",
    "Size",
    "CropPlanResponse",
    "ErrorResponse",
    "ImageInspectionResponse",
]
