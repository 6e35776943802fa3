"""
Configuration for the Print Crop service.

Values come from defaults, an optional ``.env`` file and environment
variables prefixed with ``PRINT_CROP_``. Nested sections use ``__``, e.g.
``PRINT_CROP_API__PORT=8080`` or ``PRINT_CROP_IMAGE__RESAMPLE_ENGINE=opencv``.
"""

from functools import lru_cache
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import PrintConstants, SystemConstants, UploadConstants
from core.enums import PlacementPolicy, ResampleEngine


class SystemSettings(BaseModel):
    """Logging and debug settings"""

    log_level: str = SystemConstants.LOG_LEVEL_DEFAULT
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


class APISettings(BaseModel):
    """HTTP server and CORS settings"""

    host: str = "0.0.0.0"
    port: int = Field(3001, ge=1, le=65535)
    cors_enabled: bool = True
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False


class ImageSettings(BaseModel):
    """Crop and render settings"""

    max_upload_mb: int = Field(UploadConstants.MAX_UPLOAD_SIZE_MB, ge=1)
    short_edge: int = Field(PrintConstants.SHORT_EDGE_PX, ge=1)
    target_ratio: float = Field(PrintConstants.TARGET_RATIO, gt=1.0)
    jpeg_quality: int = Field(PrintConstants.JPEG_QUALITY, ge=1, le=100)
    resample_engine: ResampleEngine = ResampleEngine.PILLOW
    placement_policy: PlacementPolicy = PlacementPolicy.FOCAL
    auto_orient: bool = True

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="PRINT_CROP_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "development"
    system: SystemSettings = Field(default_factory=SystemSettings)
    api: APISettings = Field(default_factory=APISettings)
    image: ImageSettings = Field(default_factory=ImageSettings)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


@lru_cache()
def get_settings() -> Settings:
    """Cached application settings."""
    return Settings()
