"""
Image API Router - Print crop operations
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from api.dependencies import (
    focal_point_form,
    focal_point_query,
    get_app_settings,
    get_crop_service,
)
from api.exceptions import safe_endpoint
from config import Settings
from core.constants import UploadConstants
from core.enums import PlacementPolicy
from schemas import (
    CropBox,
    CropPlanResponse,
    ErrorResponse,
    FocalPoint,
    ImageInspectionResponse,
)
from services.crop_service import CropService

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing image or invalid request"},
    413: {"model": ErrorResponse, "description": "Upload exceeds the size limit"},
    500: {"model": ErrorResponse, "description": "Image could not be processed"},
}


async def read_upload(upload: Optional[UploadFile], settings: Settings) -> Optional[bytes]:
    """
    Read an uploaded file into memory.

    Reads at most one byte past the configured limit so oversize uploads
    are detected without buffering them completely.
    """
    if upload is None:
        return None
    try:
        return await upload.read(settings.image.max_upload_bytes + 1)
    finally:
        await upload.close()


@router.post(
    "/process-image",
    response_class=Response,
    responses={200: {"content": {UploadConstants.OUTPUT_MEDIA_TYPE: {}}}, **ERROR_RESPONSES},
)
@safe_endpoint
async def process_image(
    image: Optional[UploadFile] = File(None, description="Source image"),
    focal: FocalPoint = Depends(focal_point_form),
    settings: Settings = Depends(get_app_settings),
    crop_service: CropService = Depends(get_crop_service),
) -> Response:
    """
    Crop and resize an uploaded image to the 1.4:1 print target.

    Args:
        image: Multipart file field ``image``
        focal: Focal point from ``centerX``/``centerY`` form fields
        settings: Application settings
        crop_service: Crop service dependency

    Returns:
        JPEG response with crop diagnostics in headers
    """
    if image is not None:
        logger.info(f"File received: {image.filename} ({image.content_type})")

    image_bytes = await read_upload(image, settings)
    result = await run_in_threadpool(crop_service.process_image, image_bytes, focal)

    crop_box = CropBox.from_dict(result.plan.crop.to_dict())
    headers = {
        "Content-Disposition": f'inline; filename="{UploadConstants.OUTPUT_FILENAME}"',
        "X-Crop-Box": crop_box.to_header(),
        "X-Output-Size": f"{result.plan.target.width}x{result.plan.target.height}",
    }
    return Response(
        content=result.content,
        media_type=UploadConstants.OUTPUT_MEDIA_TYPE,
        headers=headers,
    )


@router.post("/inspect-image", responses=ERROR_RESPONSES)
@safe_endpoint
async def inspect_image(
    image: Optional[UploadFile] = File(None, description="Source image"),
    focal: FocalPoint = Depends(focal_point_form),
    settings: Settings = Depends(get_app_settings),
    crop_service: CropService = Depends(get_crop_service),
) -> ImageInspectionResponse:
    """
    Plan the crop for an uploaded image and report advisory warnings.

    Nothing is rendered; the response drives the client-side preview and
    pre-validation.
    """
    image_bytes = await read_upload(image, settings)
    result = await run_in_threadpool(crop_service.inspect_image, image_bytes, focal)

    plan_response = CropPlanResponse.from_plan(result.plan)
    return ImageInspectionResponse(**plan_response.model_dump(), warnings=result.warnings)


@router.get("/plan", responses={400: ERROR_RESPONSES[400]})
@safe_endpoint
async def get_plan(
    width: int = Query(..., gt=0, description="Source width in pixels"),
    height: int = Query(..., gt=0, description="Source height in pixels"),
    policy: Optional[PlacementPolicy] = Query(None, description="Crop placement policy"),
    focal: FocalPoint = Depends(focal_point_query),
    crop_service: CropService = Depends(get_crop_service),
) -> CropPlanResponse:
    """Crop geometry for a source of the given size, without any image."""
    plan = crop_service.plan_for_size(width, height, focal, policy=policy)
    return CropPlanResponse.from_plan(plan)
