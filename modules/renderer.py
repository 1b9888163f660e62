"""
Renderer Module - Paint layout descriptors onto a canvas with Pillow
"""

import numpy as np
from pathlib import Path
from typing import Optional, Tuple
from loguru import logger
from PIL import Image, ImageDraw, ImageFilter, ImageFont, ImageOps

from config import settings
from modules.descriptor import LayoutDescriptor
from utils.image_utils import parse_color

SHADOW_OFFSET = 12
SHADOW_BLUR = 18
SHADOW_OPACITY = 0.35
BORDER_WIDTH = 6


class Renderer:
    """
    Renders a creative by layering background, main asset, text box and logo
    """

    def __init__(self, fonts_dir: Path = None):
        """
        Initialize Renderer

        Args:
            fonts_dir: Directory with TTF fonts (default: assets/fonts)
        """
        self.fonts_dir = fonts_dir or settings.FONTS_DIR

        logger.info(f"Renderer initialized (fonts: {self.fonts_dir})")

    def render(
        self,
        layout: LayoutDescriptor,
        main_asset_path: Path,
        logo_path: Optional[Path] = None,
        bg_remove: bool = False
    ) -> Image.Image:
        """
        Render a complete creative

        Args:
            layout: Layout descriptor
            main_asset_path: Path to the main product image
            logo_path: Optional path to the logo image
            bg_remove: Clip the main asset to an ellipse

        Returns:
            Rendered RGB image of layout.canvas_size
        """
        logger.info(f"Rendering {layout.id} ({layout.canvas_size.width}x{layout.canvas_size.height})...")

        # 1. Background
        canvas = self._create_background(layout)

        # 2. Main asset
        canvas = self._place_main_asset(canvas, layout, main_asset_path, bg_remove)

        # 3. Text box
        canvas = self._add_text_overlay(canvas, layout)

        # 4. Logo
        if logo_path is not None and layout.logo is not None:
            try:
                canvas = self._place_logo(canvas, layout, logo_path)
            except (OSError, ValueError) as e:
                logger.error(f"Error loading logo {logo_path}: {e}")

        # 5. Safe area guideline
        if settings.SHOW_SAFE_AREA_GUIDE:
            canvas = self._draw_safe_area(canvas, layout.compliance.safe_zone_px)

        logger.info("Rendering complete")

        return canvas.convert("RGB")

    def _create_background(self, layout: LayoutDescriptor) -> Image.Image:
        """
        Fill the canvas with the background colour and optional vertical gradient

        Args:
            layout: Layout descriptor

        Returns:
            RGBA canvas
        """
        width, height = layout.canvas_size.width, layout.canvas_size.height
        background = layout.background

        canvas = Image.new("RGBA", (width, height), parse_color(background.color))

        gradient = background.gradient
        if gradient is not None and gradient.direction == "vertical" and len(gradient.color_stops) >= 2:
            start = np.array(parse_color(gradient.color_stops[0])[:3], dtype=np.float32)
            end = np.array(parse_color(gradient.color_stops[-1])[:3], dtype=np.float32)

            t = np.linspace(0.0, 1.0, height, dtype=np.float32)[:, None]
            rows = start + (end - start) * t
            pixels = np.repeat(rows[:, None, :], width, axis=1).astype(np.uint8)

            alpha = np.full((height, width, 1), int(gradient.opacity * 255), dtype=np.uint8)
            layer = Image.fromarray(np.concatenate([pixels, alpha], axis=2), "RGBA")
            canvas = Image.alpha_composite(canvas, layer)

        return canvas

    def _fit_into(self, image: Image.Image, width: int, height: int) -> Image.Image:
        """Shrink one side so the image keeps its aspect ratio inside width x height"""
        aspect = image.height / image.width
        if height / width > aspect:
            height = int(width * aspect)
        else:
            width = int(height / aspect)

        return image.resize((max(1, width), max(1, height)), Image.LANCZOS)

    def _place_main_asset(
        self,
        canvas: Image.Image,
        layout: LayoutDescriptor,
        image_path: Path,
        bg_remove: bool
    ) -> Image.Image:
        """
        Composite the main asset into its rectangle

        Args:
            canvas: RGBA canvas
            layout: Layout descriptor
            image_path: Path to main asset
            bg_remove: Clip to an ellipse

        Returns:
            Updated canvas
        """
        rect = layout.main_asset

        with Image.open(image_path) as source:
            asset = ImageOps.exif_transpose(source).convert("RGBA")

        asset = self._fit_into(asset, rect.width, rect.height)

        mask = asset.getchannel("A")
        if bg_remove:
            ellipse = Image.new("L", asset.size, 0)
            ImageDraw.Draw(ellipse).ellipse((0, 0, asset.width - 1, asset.height - 1), fill=255)
            mask = Image.fromarray(np.minimum(np.array(mask), np.array(ellipse)))

        position = (rect.x, rect.y)

        if layout.effects.shadows:
            canvas = self._add_shadow(canvas, mask, position)

        canvas.paste(asset, position, mask)

        if layout.effects.borders and not bg_remove:
            draw = ImageDraw.Draw(canvas)
            draw.rectangle(
                (rect.x, rect.y, rect.x + asset.width - 1, rect.y + asset.height - 1),
                outline=(255, 255, 255, 255),
                width=BORDER_WIDTH,
            )

        logger.debug(f"Placed main asset at {position}, size {asset.width}x{asset.height}")

        return canvas

    def _add_shadow(self, canvas: Image.Image, mask: Image.Image, position: Tuple[int, int]) -> Image.Image:
        """
        Add a soft drop shadow under the main asset

        Args:
            canvas: RGBA canvas
            mask: Asset alpha mask
            position: Asset top-left corner

        Returns:
            Canvas with shadow
        """
        shadow_mask = Image.new("L", canvas.size, 0)
        shadow_mask.paste(mask, (position[0] + SHADOW_OFFSET, position[1] + SHADOW_OFFSET))
        shadow_mask = shadow_mask.filter(ImageFilter.GaussianBlur(SHADOW_BLUR))
        shadow_mask = shadow_mask.point(lambda v: int(v * SHADOW_OPACITY))

        shadow = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        shadow.putalpha(shadow_mask)

        return Image.alpha_composite(canvas, shadow)

    def _load_font(self, font_size: int, font_weight: str) -> ImageFont.ImageFont:
        """
        Load the configured font, falling back to Pillow's default

        Args:
            font_size: Font size in pixels
            font_weight: 'bold' picks the bold font file

        Returns:
            Font object
        """
        font_name = settings.FONT_BOLD if font_weight == "bold" else settings.FONT_REGULAR
        font_path = self.fonts_dir / font_name

        try:
            if font_path.exists():
                return ImageFont.truetype(str(font_path), font_size)
            # Let Pillow look in the system font directories
            return ImageFont.truetype(font_name, font_size)
        except OSError as e:
            logger.warning(f"Font not found: {font_name} ({e}), using default")
            return ImageFont.load_default(size=font_size)

    def _add_text_overlay(self, canvas: Image.Image, layout: LayoutDescriptor) -> Image.Image:
        """
        Draw the text box and its quote

        The box grows horizontally when the quote is wider than the rectangle.

        Args:
            canvas: RGBA canvas
            layout: Layout descriptor

        Returns:
            Canvas with text
        """
        overlay = layout.text_overlay
        rect = overlay.rect
        text = overlay.content

        font = self._load_font(overlay.font_size, overlay.font_weight)

        text_layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(text_layer)

        bbox = draw.textbbox((0, 0), text, font=font)
        text_width = bbox[2] - bbox[0]
        box_width = max(rect.width, text_width + overlay.padding * 2)

        draw.rectangle(
            (rect.x, rect.y, rect.x + box_width, rect.y + rect.height),
            fill=parse_color(overlay.background_color),
        )

        anchor = {"left": "lm", "right": "rm"}.get(overlay.alignment, "mm")
        if anchor == "lm":
            text_x = rect.x + overlay.padding
        elif anchor == "rm":
            text_x = rect.x + box_width - overlay.padding
        else:
            text_x = rect.x + box_width / 2

        draw.text(
            (text_x, rect.y + rect.height / 2),
            text,
            font=font,
            fill=parse_color(overlay.text_color),
            anchor=anchor,
        )

        logger.debug(f"Text box at ({rect.x}, {rect.y}) {box_width}x{rect.height}: '{text}'")

        return Image.alpha_composite(canvas, text_layer)

    def _place_logo(self, canvas: Image.Image, layout: LayoutDescriptor, logo_path: Path) -> Image.Image:
        """
        Composite the logo into its corner slot

        Args:
            canvas: RGBA canvas
            layout: Layout descriptor (logo must be present)
            logo_path: Path to logo image

        Returns:
            Canvas with logo
        """
        placement = layout.logo
        rect = placement.rect

        with Image.open(logo_path) as source:
            logo = source.convert("RGBA")

        logo = self._fit_into(logo, rect.width, rect.height)

        if placement.opacity < 1.0:
            alpha = logo.getchannel("A").point(lambda v: int(v * placement.opacity))
            logo.putalpha(alpha)

        layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        layer.paste(logo, (rect.x, rect.y))

        return Image.alpha_composite(canvas, layer)

    def _draw_safe_area(self, canvas: Image.Image, safe_zone: int) -> Image.Image:
        """Draw a faint rectangle marking the safe zone"""
        layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        draw.rectangle(
            (safe_zone, safe_zone, canvas.width - safe_zone, canvas.height - safe_zone),
            outline=parse_color(settings.SAFE_AREA_GUIDE_COLOR),
            width=settings.SAFE_AREA_GUIDE_WIDTH,
        )

        return Image.alpha_composite(canvas, layer)

    def apply_contrast_fix(self, image: Image.Image) -> Image.Image:
        """
        Darken the bottom-right text band to lift text contrast

        Args:
            image: Rendered creative

        Returns:
            Fixed RGB image
        """
        right, bottom, band_w, band_h = settings.CONTRAST_FIX_BAND
        x = image.width - right
        y = image.height - bottom

        layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
        ImageDraw.Draw(layer).rectangle(
            (x, y, x + band_w, y + band_h),
            fill=parse_color(settings.CONTRAST_FIX_COLOR),
        )

        logger.info(f"Applied contrast fix band at ({x}, {y}) {band_w}x{band_h}")

        return Image.alpha_composite(image.convert("RGBA"), layer).convert("RGB")
