"""
Crop geometry for the print target.

Pure arithmetic shared by the render path and the preview/inspection path:
- Orientation and fixed target size
- Largest crop of the target ratio that fits the source
- Crop placement (focal-point aware or centered)
- Source assessment warnings
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

from core.constants import ErrorMessages, PrintConstants, WarningMessages
from core.enums import Orientation, PlacementPolicy
from core.exceptions import CropGeometryException


@dataclass(frozen=True)
class TargetSize:
    """Final output resolution"""

    width: int
    height: int

    def to_dict(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class CropRect:
    """Integer pixel rectangle inside the source image"""

    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, upper, right, lower) as expected by Pillow's crop()."""
        return (self.left, self.top, self.right, self.bottom)

    def fits_within(self, width: int, height: int) -> bool:
        return self.left >= 0 and self.top >= 0 and self.right <= width and self.bottom <= height

    def to_dict(self) -> Dict[str, int]:
        return {"left": self.left, "top": self.top, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class CropPlan:
    """Everything decided for one source image"""

    source_width: int
    source_height: int
    orientation: Orientation
    focal_x: float
    focal_y: float
    crop: CropRect
    target: TargetSize

    @property
    def upscales(self) -> bool:
        """True when the crop is smaller than the output and will be enlarged."""
        return self.crop.width < self.target.width or self.crop.height < self.target.height


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, unlike round()."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def detect_orientation(width: int, height: int) -> Orientation:
    """Images strictly taller than wide are vertical, everything else horizontal."""
    return Orientation.VERTICAL if height > width else Orientation.HORIZONTAL


def target_size(
    orientation: Orientation,
    short_edge: int = PrintConstants.SHORT_EDGE_PX,
    ratio: float = PrintConstants.TARGET_RATIO,
) -> TargetSize:
    """
    Output size for the given orientation.

    The short axis is fixed at ``short_edge`` and the long axis is
    ``short_edge * ratio``, i.e. 2900x4060 (vertical) or 4060x2900.
    """
    long_edge = round_half_up(short_edge * ratio)
    if orientation == Orientation.VERTICAL:
        target = TargetSize(width=short_edge, height=long_edge)
    else:
        target = TargetSize(width=long_edge, height=short_edge)

    if target.width <= 0 or target.height <= 0:
        raise CropGeometryException(
            ErrorMessages.INVALID_TARGET_SIZE.format(width=target.width, height=target.height)
        )
    return target


def crop_size(
    width: int,
    height: int,
    orientation: Orientation,
    ratio: float = PrintConstants.TARGET_RATIO,
) -> Tuple[int, int]:
    """
    Largest (crop_width, crop_height) of the target ratio fitting the source.

    Whichever source axis is the binding constraint is used in full and the
    other axis is derived from it.
    """
    if orientation == Orientation.VERTICAL:
        if width * ratio <= height:
            crop_width = width
            crop_height = round_half_up(crop_width * ratio)
        else:
            crop_height = height
            crop_width = round_half_up(crop_height / ratio)
    else:
        if height * ratio <= width:
            crop_height = height
            crop_width = round_half_up(crop_height * ratio)
        else:
            crop_width = width
            crop_height = round_half_up(crop_width / ratio)

    if crop_width <= 0 or crop_height <= 0:
        raise CropGeometryException(
            ErrorMessages.INVALID_CROP_SIZE.format(width=crop_width, height=crop_height)
        )
    return crop_width, crop_height


def place_crop(
    width: int,
    height: int,
    crop_width: int,
    crop_height: int,
    focal_x: float = PrintConstants.DEFAULT_FOCAL,
    focal_y: float = PrintConstants.DEFAULT_FOCAL,
    policy: PlacementPolicy = PlacementPolicy.FOCAL,
) -> CropRect:
    """Position a crop of the given size inside the source."""
    max_left = width - crop_width
    max_top = height - crop_height

    if policy == PlacementPolicy.CENTERED:
        left = round_half_up(max_left / 2)
        top = round_half_up(max_top / 2)
    else:
        left = round_half_up(clamp(width * focal_x - crop_width / 2, 0, max_left))
        top = round_half_up(clamp(height * focal_y - crop_height / 2, 0, max_top))

    return CropRect(left=left, top=top, width=crop_width, height=crop_height)


def build_crop_plan(
    source_width: int,
    source_height: int,
    focal_x: float = PrintConstants.DEFAULT_FOCAL,
    focal_y: float = PrintConstants.DEFAULT_FOCAL,
    policy: PlacementPolicy = PlacementPolicy.FOCAL,
    short_edge: int = PrintConstants.SHORT_EDGE_PX,
    ratio: float = PrintConstants.TARGET_RATIO,
) -> CropPlan:
    """
    Compute the complete crop plan for a source image.

    Args:
        source_width: Source width in pixels
        source_height: Source height in pixels
        focal_x: Normalized horizontal focal coordinate, clamped to [0, 1]
        focal_y: Normalized vertical focal coordinate, clamped to [0, 1]
        policy: Crop placement policy
        short_edge: Output short edge in pixels
        ratio: Long:short edge ratio of crop and output

    Returns:
        CropPlan with crop rectangle and target size

    Raises:
        CropGeometryException: If any source or derived dimension is not positive
    """
    if source_width <= 0 or source_height <= 0:
        raise CropGeometryException(
            ErrorMessages.INVALID_SOURCE_SIZE.format(width=source_width, height=source_height)
        )

    focal_x = clamp(focal_x, PrintConstants.MIN_FOCAL, PrintConstants.MAX_FOCAL)
    focal_y = clamp(focal_y, PrintConstants.MIN_FOCAL, PrintConstants.MAX_FOCAL)

    orientation = detect_orientation(source_width, source_height)
    target = target_size(orientation, short_edge=short_edge, ratio=ratio)
    crop_width, crop_height = crop_size(source_width, source_height, orientation, ratio=ratio)
    crop = place_crop(
        source_width, source_height, crop_width, crop_height, focal_x, focal_y, policy
    )

    return CropPlan(
        source_width=source_width,
        source_height=source_height,
        orientation=orientation,
        focal_x=focal_x,
        focal_y=focal_y,
        crop=crop,
        target=target,
    )


def plan(
    source_width: int,
    source_height: int,
    focal_x: float = PrintConstants.DEFAULT_FOCAL,
    focal_y: float = PrintConstants.DEFAULT_FOCAL,
    policy: PlacementPolicy = PlacementPolicy.FOCAL,
) -> Tuple[CropRect, TargetSize]:
    """Crop rectangle and target size for a source image."""
    crop_plan = build_crop_plan(source_width, source_height, focal_x, focal_y, policy)
    return crop_plan.crop, crop_plan.target


def assess_source(
    width: int,
    height: int,
    short_edge: int = PrintConstants.SHORT_EDGE_PX,
    ratio: float = PrintConstants.TARGET_RATIO,
    tolerance: float = PrintConstants.RATIO_TOLERANCE,
) -> List[str]:
    """
    Advisory warnings about a source image before it is processed.

    Reports sources smaller than the target in either axis (they will be
    upscaled) and long:short ratios more than ``tolerance`` away from the
    target ratio (they will be cropped).
    """
    if width <= 0 or height <= 0:
        raise CropGeometryException(
            ErrorMessages.INVALID_SOURCE_SIZE.format(width=width, height=height)
        )

    warnings: List[str] = []
    target = target_size(detect_orientation(width, height), short_edge=short_edge, ratio=ratio)

    if width < target.width or height < target.height:
        warnings.append(
            WarningMessages.BELOW_TARGET.format(
                width=width,
                height=height,
                target_width=target.width,
                target_height=target.height,
            )
        )

    source_ratio = max(width, height) / min(width, height)
    if abs(source_ratio - ratio) > tolerance:
        warnings.append(WarningMessages.RATIO_MISMATCH.format(ratio=source_ratio, target=ratio))

    return warnings
