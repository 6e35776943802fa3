"""
Shared FastAPI dependencies for the Print Crop service.
Centralizes common dependencies to eliminate code duplication.
"""

import logging
import math
from typing import Optional

from fastapi import Form, HTTPException, Query, Request

from config import Settings, get_settings
from core.constants import ErrorMessages, PrintConstants
from schemas import FocalPoint
from services.crop_service import CropService

logger = logging.getLogger(__name__)


def parse_focal_coordinate(value: Optional[str]) -> float:
    """
    Leniently parse a normalized focal coordinate.

    Absent, blank, unparsable or non-finite values fall back to the image
    center; anything outside [0, 1] is clamped into range.

    Args:
        value: Raw form or query value

    Returns:
        Coordinate in [0, 1]
    """
    if value is None:
        return PrintConstants.DEFAULT_FOCAL

    try:
        number = float(str(value).strip())
    except ValueError:
        logger.debug(f"Unparsable focal coordinate {value!r}, using center")
        return PrintConstants.DEFAULT_FOCAL

    if not math.isfinite(number):
        return PrintConstants.DEFAULT_FOCAL

    return max(PrintConstants.MIN_FOCAL, min(PrintConstants.MAX_FOCAL, number))


def focal_point_form(
    centerX: Optional[str] = Form(None, description="Normalized focal x in [0, 1]"),
    centerY: Optional[str] = Form(None, description="Normalized focal y in [0, 1]"),
) -> FocalPoint:
    """Focal point from multipart form fields."""
    return FocalPoint(x=parse_focal_coordinate(centerX), y=parse_focal_coordinate(centerY))


def focal_point_query(
    centerX: Optional[str] = Query(None, description="Normalized focal x in [0, 1]"),
    centerY: Optional[str] = Query(None, description="Normalized focal y in [0, 1]"),
) -> FocalPoint:
    """Focal point from query parameters."""
    return FocalPoint(x=parse_focal_coordinate(centerX), y=parse_focal_coordinate(centerY))


def get_app_settings(request: Request) -> Settings:
    """
    Get settings from app state.

    Falls back to the cached environment settings when the app was
    created without a lifespan run (e.g. in tests).
    """
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        logger.warning("Settings not found in app state, using defaults")
        return get_settings()
    return settings


def get_crop_service(request: Request) -> CropService:
    """
    Get CropService instance from app state.

    Raises:
        HTTPException: If the service was not initialized
    """
    try:
        return request.app.state.crop_service
    except AttributeError as e:
        logger.error(f"Crop service not initialized in app state: {e}")
        raise HTTPException(status_code=500, detail=ErrorMessages.SERVICE_NOT_INITIALIZED)
