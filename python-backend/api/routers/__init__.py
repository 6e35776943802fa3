"""
API Routers for the Print Crop service
"""

from . import image

__all__ = ["image"]
