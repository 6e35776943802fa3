"""
Tests for the exception hierarchy
"""

import ast
from pathlib import Path

import pytest

import api.exceptions
import core
from core.exceptions import (
    CropGeometryException,
    ImageDecodeException,
    ImageMissingException,
    ImageTooLargeException,
    PrintCropException,
    ResampleException,
)

CORE_DIR = Path(core.__file__).parent


class TestExceptions:
    """Test error bodies and status codes"""

    def test_missing_image_body(self):
        exc = ImageMissingException()
        assert exc.status_code == 400
        assert exc.to_dict() == {"error": "No image file provided"}

    def test_too_large_carries_details(self):
        exc = ImageTooLargeException(size_bytes=60 * 1024 * 1024, limit_mb=50)
        assert exc.status_code == 413
        assert exc.to_dict()["details"] == {"size_bytes": 60 * 1024 * 1024, "limit_mb": 50}

    @pytest.mark.parametrize(
        "exc",
        [
            ImageDecodeException("bad header"),
            ResampleException("encoder"),
            CropGeometryException("bad crop"),
        ],
    )
    def test_server_errors_are_prefixed(self, exc):
        assert exc.status_code == 500
        assert exc.to_dict()["error"].startswith("Failed to process image: ")

    def test_api_reexports_core_classes(self):
        assert api.exceptions.PrintCropException is PrintCropException
        assert api.exceptions.ImageDecodeException is ImageDecodeException


class TestCoreLayering:
    """The core package stays free of the web layer"""

    @pytest.mark.parametrize(
        "path", sorted(CORE_DIR.rglob("*.py")), ids=lambda p: str(p.relative_to(CORE_DIR))
    )
    def test_no_web_imports(self, path):
        tree = ast.parse(path.read_text())
        modules = set()
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                modules.update(alias.name.split(".")[0] for alias in node.names)
            elif isinstance(node, ast.ImportFrom) and node.module:
                modules.add(node.module.split(".")[0])
        assert not modules & {"api", "fastapi", "starlette", "services"}
