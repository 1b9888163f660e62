"""
Exporter Module - Resize rendered creatives for advertising platforms
"""

import random
import time
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Optional
from loguru import logger

from config import settings
from utils.exceptions import UnsupportedPlatformError
from utils.image_utils import fit_contain, load_image, save_image

# Target sizes per platform/format, with the platform rules attached
PLATFORM_EXPORT_SPECS = MappingProxyType({
    "meta": {
        "square": {"width": 1080, "height": 1080, "max_text_coverage": 0.2},
        "story": {"width": 1080, "height": 1920, "max_text_coverage": 0.2},
        "feed": {"width": 1200, "height": 628, "max_text_coverage": 0.2},
    },
    "google": {
        "display": {"width": 300, "height": 250},
        "banner": {"width": 728, "height": 90},
        "square": {"width": 250, "height": 250},
    },
    "amazon": {
        "main": {"width": 1000, "height": 1000, "min_product_coverage": 0.85},
        "thumbnail": {"width": 75, "height": 75},
        "zoom": {"width": 2000, "height": 2000},
    },
})


class PlatformExporter:
    """
    Exports creatives at platform-specific sizes (letterboxed on white)
    """

    def __init__(self, output_dir: Path = None):
        """
        Initialize Exporter

        Args:
            output_dir: Output directory (default: workspace/exports)
        """
        self.output_dir = output_dir or settings.EXPORTS_DIR
        self.output_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"PlatformExporter initialized with output dir: {self.output_dir}")

    def get_spec(self, platform: str, format: Optional[str] = None) -> Dict:
        """
        Look up the export size for a platform/format pair

        Args:
            platform: Platform name (case-insensitive)
            format: Platform format (default: square)

        Returns:
            Spec dict with width/height and platform rules
        """
        platform_key = (platform or "").lower()
        format_key = format or "square"

        formats = PLATFORM_EXPORT_SPECS.get(platform_key)
        if formats is None or format_key not in formats:
            raise UnsupportedPlatformError(platform, format, available=list(PLATFORM_EXPORT_SPECS))

        return formats[format_key]

    def export(self, source_path: Path, platform: str, format: Optional[str] = None) -> Dict:
        """
        Export a creative for one platform

        Args:
            source_path: Rendered creative
            platform: Platform name
            format: Platform format (default: square)

        Returns:
            Export result dict
        """
        spec = self.get_spec(platform, format)
        platform_key = platform.lower()
        format_key = format or "square"
        size = (spec["width"], spec["height"])

        image = load_image(source_path)
        resized = fit_contain(image, size, background=settings.EXPORT_BACKGROUND)

        filename = f"export-{platform_key}-{format_key}-{int(time.time() * 1000)}-{random.randint(0, 10**6)}.png"
        output_path = self.output_dir / filename
        save_image(resized, output_path, compression=settings.EXPORT_PNG_COMPRESSION)

        logger.info(f"Exported {source_path.name} for {platform_key}/{format_key}: {filename}")

        return {
            "success": True,
            "image_url": f"/exports/{filename}",
            "platform": platform_key,
            "format": format_key,
            "dimensions": {"width": spec["width"], "height": spec["height"]},
            "file_size": output_path.stat().st_size,
            "requirements": dict(spec),
        }

    def export_batch(self, source_path: Path, targets: List[Dict]) -> Dict:
        """
        Export a creative for several platforms

        A failing target is reported in place and does not stop the batch.

        Args:
            source_path: Rendered creative
            targets: List of {"platform", "format"} dicts

        Returns:
            Dict with per-target results and counts
        """
        exports = []
        for target in targets:
            platform = target.get("platform")
            format = target.get("format")
            try:
                exports.append(self.export(source_path, platform, format))
            except (UnsupportedPlatformError, FileNotFoundError, ValueError) as e:
                logger.warning(f"Export failed for {platform}/{format}: {e}")
                exports.append({
                    "platform": platform,
                    "format": format,
                    "error": str(e),
                    "success": False,
                })

        successful = sum(1 for e in exports if e["success"])
        logger.info(f"✅ Batch export: {successful}/{len(exports)} succeeded")

        return {
            "success": True,
            "exports": exports,
            "total": len(exports),
            "successful": successful,
        }

    def list_exports(self) -> List[Path]:
        """
        List platform exports, newest first

        Returns:
            List of exported file paths
        """
        exports = sorted(
            self.output_dir.glob("export-*.png"),
            key=lambda p: p.stat().st_mtime,
            reverse=True
        )

        return exports
