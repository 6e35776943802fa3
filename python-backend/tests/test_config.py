"""
Tests for application configuration
"""

import pytest
from pydantic import ValidationError

from config import Settings
from core.enums import PlacementPolicy, ResampleEngine


class TestSettings:
    """Test Settings loading"""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.api.port == 3001
        assert settings.api.cors_origins == ["*"]
        assert settings.image.short_edge == 2900
        assert settings.image.target_ratio == 1.4
        assert settings.image.jpeg_quality == 100
        assert settings.image.resample_engine == ResampleEngine.PILLOW
        assert settings.image.placement_policy == PlacementPolicy.FOCAL

    def test_nested_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PRINT_CROP_ENVIRONMENT", "production")
        monkeypatch.setenv("PRINT_CROP_API__PORT", "8080")
        monkeypatch.setenv("PRINT_CROP_API__CORS_ORIGINS", '["https://example.com"]')
        monkeypatch.setenv("PRINT_CROP_IMAGE__RESAMPLE_ENGINE", "opencv")
        monkeypatch.setenv("PRINT_CROP_SYSTEM__LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.is_production
        assert settings.api.port == 8080
        assert settings.api.cors_origins == ["https://example.com"]
        assert settings.image.resample_engine == ResampleEngine.OPENCV
        assert settings.system.log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("PRINT_CROP_SYSTEM__LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_quality(self, monkeypatch):
        monkeypatch.setenv("PRINT_CROP_IMAGE__JPEG_QUALITY", "101")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_to_dict_is_plain(self):
        data = Settings(_env_file=None).to_dict()
        assert data["image"]["resample_engine"] == "pillow"
        assert data["image"]["placement_policy"] == "focal"
