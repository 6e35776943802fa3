"""
FastAPI exception handlers for the Print Crop service.

Every failure is local to a single request: handlers translate exceptions
into JSON error bodies of the form ``{"error": "<message>"}`` and the server
keeps serving subsequent requests.
"""

import functools
import logging
from typing import Callable

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.constants import ErrorMessages
from core.exceptions import (
    CropGeometryException,
    ImageDecodeException,
    ImageMissingException,
    ImageTooLargeException,
    PrintCropException,
    ResampleException,
)

__all__ = [
    "CropGeometryException",
    "ImageDecodeException",
    "ImageMissingException",
    "ImageTooLargeException",
    "PrintCropException",
    "ResampleException",
    "register_exception_handlers",
    "safe_endpoint",
]

logger = logging.getLogger(__name__)


async def print_crop_exception_handler(request: Request, exc: PrintCropException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"Processing failed for {request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"Invalid request for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "error": ErrorMessages.INVALID_REQUEST,
            "details": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ],
        },
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    detail = exc.detail
    content = detail if isinstance(detail, dict) else {"error": str(detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": ErrorMessages.INTERNAL_ERROR})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the application."""
    app.add_exception_handler(PrintCropException, print_crop_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)


def safe_endpoint(func: Callable) -> Callable:
    """
    Decorator for router endpoints.

    Domain and HTTP exceptions propagate to their registered handlers;
    anything else is logged and reported as a processing failure.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (PrintCropException, HTTPException):
            raise
        except Exception as e:
            logger.error(f"Unhandled error in {func.__name__}: {e}", exc_info=True)
            raise PrintCropException(str(e)) from e

    return wrapper
