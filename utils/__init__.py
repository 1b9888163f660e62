"""
Utility Functions
"""

from .image_utils import (
    load_image,
    save_image,
    resize_image,
    fit_contain,
    parse_color,
)

__all__ = [
    "load_image",
    "save_image",
    "resize_image",
    "fit_contain",
    "parse_color",
]
