"""
Print Crop Service - Main FastAPI Application
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from api.exceptions import register_exception_handlers  # noqa: E402
from api.routers import image  # noqa: E402
from config import Settings, get_settings  # noqa: E402
from core.constants import SystemConstants  # noqa: E402
from services.crop_service import CropService  # noqa: E402

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format=SystemConstants.LOG_FORMAT,
)
logger = logging.getLogger(__name__)

# Suppress watchfiles debug messages
logging.getLogger("watchfiles").setLevel(logging.WARNING)


def init_app_state(app: FastAPI, app_settings: Settings) -> None:
    """Store settings and the shared crop service in app state."""
    app.state.settings = app_settings
    app.state.config = app_settings.to_dict()
    app.state.crop_service = CropService(app_settings.image)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    logger.info(f"Starting {SystemConstants.SERVICE_NAME}...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")
    logger.info(
        f"CORS enabled for origins {settings.api.cors_origins}"
        if settings.api.cors_enabled
        else "CORS disabled"
    )

    init_app_state(app, settings)
    logger.info("Crop service initialized")

    yield

    logger.info("Server shutdown complete")


# Create FastAPI app
app = FastAPI(
    title=SystemConstants.SERVICE_NAME,
    description="Crops uploaded artwork to a 1.4:1 print target around a focal point",
    version=SystemConstants.VERSION,
    lifespan=lifespan,
)

# Configure CORS, preflight OPTIONS is answered by the middleware on all routes
if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        expose_headers=["Content-Disposition", "X-Crop-Box", "X-Output-Size"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(image.router, tags=["Image"])


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its status and duration"""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.0f} ms)"
    )
    return response


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Server is running",
        "name": SystemConstants.SERVICE_NAME,
        "version": SystemConstants.VERSION,
        "endpoints": {
            "process": "/process-image",
            "inspect": "/inspect-image",
            "plan": "/plan",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "crop_service": getattr(app.state, "crop_service", None) is not None,
        },
    }


if __name__ == "__main__":
    host = settings.api.host if settings.is_production else "localhost"
    logger.info(f"Server running at http://{host}:{settings.api.port}")

    server_config = uvicorn.Config(
        "main:app",
        host=host,
        port=settings.api.port,
        reload=settings.system.debug,
        log_level=settings.system.log_level.lower(),
        loop="asyncio",
    )
    server = uvicorn.Server(server_config)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        logger.info("Server exiting...")
