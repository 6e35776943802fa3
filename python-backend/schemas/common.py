"""
Common data models shared across API layers.
"""

from typing import Dict

from pydantic import BaseModel, Field

from core.constants import PrintConstants


class Size(BaseModel):
    """Pixel dimensions"""

    width: int = Field(..., gt=0, description="Width in pixels")
    height: int = Field(..., gt=0, description="Height in pixels")


class CropBox(BaseModel):
    """Crop rectangle in source pixel coordinates"""

    left: int = Field(..., ge=0, description="Left edge")
    top: int = Field(..., ge=0, description="Top edge")
    width: int = Field(..., gt=0, description="Width")
    height: int = Field(..., gt=0, description="Height")

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> "CropBox":
        return cls(**data)

    def to_header(self) -> str:
        """Comma separated ``left,top,width,height``."""
        return f"{self.left},{self.top},{self.width},{self.height}"


class FocalPoint(BaseModel):
    """Normalized point the crop is centered on"""

    x: float = Field(
        PrintConstants.DEFAULT_FOCAL,
        ge=PrintConstants.MIN_FOCAL,
        le=PrintConstants.MAX_FOCAL,
        description="Horizontal position, 0 = left edge, 1 = right edge",
    )
    y: float = Field(
        PrintConstants.DEFAULT_FOCAL,
        ge=PrintConstants.MIN_FOCAL,
        le=PrintConstants.MAX_FOCAL,
        description="Vertical position, 0 = top edge, 1 = bottom edge",
    )
