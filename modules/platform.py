"""
Platform Normalization - Fit a layout descriptor to a format's text and safe-zone limits
"""

from dataclasses import replace
from typing import Optional
from loguru import logger

from config import settings
from modules.descriptor import LayoutDescriptor, Rect
from modules.design_tables import get_format_spec


def text_coverage(descriptor: LayoutDescriptor) -> float:
    """Fraction of the canvas covered by the text box"""
    return descriptor.text_overlay.rect.area / descriptor.canvas_size.area


def normalize(
    descriptor: LayoutDescriptor,
    format,
    clamp_far_edge: Optional[bool] = None
) -> LayoutDescriptor:
    """
    Normalize a descriptor for a target format

    The text box is shrunk uniformly (top-left corner fixed) when it covers
    more than the format allows. The main asset origin is pushed inside the
    safe zone; the far edge is only clamped when clamp_far_edge is set.

    Args:
        descriptor: Layout to normalize (left untouched)
        format: Target format (unknown values fall back to square)
        clamp_far_edge: Also clamp right/bottom edges (default from settings)

    Returns:
        Normalized copy of the descriptor
    """
    spec = get_format_spec(format)
    if clamp_far_edge is None:
        clamp_far_edge = settings.NORMALIZE_CLAMP_FAR_EDGE

    text = descriptor.text_overlay
    text_rect = text.rect

    coverage = text_coverage(descriptor)
    if coverage > spec.max_text_coverage:
        scale = spec.max_text_coverage / coverage
        text_rect = replace(
            text_rect,
            width=int(text_rect.width * scale),
            height=int(text_rect.height * scale),
        )
        logger.debug(
            f"Text coverage {coverage:.3f} > {spec.max_text_coverage} - "
            f"scaled text box by {scale:.3f} to {text_rect.width}x{text_rect.height}"
        )

    main = descriptor.main_asset
    x = max(spec.safe_zone, main.x)
    y = max(spec.safe_zone, main.y)

    if clamp_far_edge:
        canvas = descriptor.canvas_size
        x = max(spec.safe_zone, min(x, canvas.width - main.width - spec.safe_zone))
        y = max(spec.safe_zone, min(y, canvas.height - main.height - spec.safe_zone))

    return replace(
        descriptor,
        text_overlay=replace(text, rect=text_rect),
        main_asset=Rect(x=x, y=y, width=main.width, height=main.height),
    )
