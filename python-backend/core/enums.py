"""
Centralized enums for the Print Crop service.
"""

from enum import Enum


class Orientation(str, Enum):
    """Orientation of the source image, which selects the target layout"""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class PlacementPolicy(str, Enum):
    """How the crop rectangle is positioned inside the source"""

    FOCAL = "focal"
    CENTERED = "centered"


class ResampleEngine(str, Enum):
    """Library used for the Lanczos resize"""

    PILLOW = "pillow"
    OPENCV = "opencv"
