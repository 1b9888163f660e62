"""
Compliance Module - Contrast, safe-zone and platform checks on rendered creatives
"""

from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple
import numpy as np
from loguru import logger

from config import settings
from modules.descriptor import LayoutDescriptor, Rect
from modules.design_tables import Format
from modules.platform import text_coverage
from utils.image_utils import parse_color

WHITE = (255, 255, 255)

# Logo rectangle assumed when no layout is supplied
DEFAULT_LOGO_RECT = Rect(x=30, y=30, width=140, height=50)


@dataclass
class Violation:
    """A single compliance problem"""
    type: str
    severity: str
    message: str
    fixable: bool = False
    standard: Optional[str] = None
    platform: Optional[str] = None

    def to_dict(self) -> Dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class PlatformRequirement:
    """Advertising platform rule and whether the creative meets it"""
    platform: str
    passed: bool
    message: str
    severity: str = "medium"
    fixable: bool = False


def luminance(r: float, g: float, b: float) -> float:
    """
    WCAG relative luminance

    Args:
        r, g, b: Channel values (0-255)

    Returns:
        Luminance (0-1)
    """
    def channel(v: float) -> float:
        v /= 255
        return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4

    return 0.2126 * channel(r) + 0.7152 * channel(g) + 0.0722 * channel(b)


def contrast_ratio(l1: float, l2: float) -> float:
    """WCAG contrast ratio between two luminances (1-21)"""
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def platform_requirements(format, layout: Optional[LayoutDescriptor] = None) -> List[PlatformRequirement]:
    """
    Platform rules that apply to a format

    Only the Meta text-coverage rule is measured (from the layout, when given);
    the others are reported as informational.

    Args:
        format: Creative format
        layout: Optional layout descriptor

    Returns:
        List of requirements
    """
    format = Format.coerce(format)
    checks = []

    if format in (Format.SQUARE, Format.STORY):
        passed = True
        if layout is not None:
            passed = text_coverage(layout) <= settings.META_MAX_TEXT_COVERAGE
        checks.append(PlatformRequirement(
            platform="Meta",
            passed=passed,
            message=f"Meta requires {settings.META_MAX_TEXT_COVERAGE:.0%} text coverage maximum",
            severity="high",
            fixable=True,
        ))

    if format is Format.BANNER:
        checks.append(PlatformRequirement(
            platform="Google",
            passed=True,
            message="Google Ads requires clear call-to-action",
            severity="medium",
            fixable=True,
        ))

    checks.append(PlatformRequirement(
        platform="Amazon",
        passed=True,
        message="Amazon requires product image to cover at least 85% of creative",
        severity="high",
        fixable=False,
    ))

    return checks


class ComplianceChecker:
    """
    Samples fixed pixel patches of a rendered canvas and checks brand guidelines
    """

    def __init__(self):
        """
        Initialize Compliance Checker
        """
        self.min_contrast_ratio = settings.MIN_CONTRAST_RATIO
        self.min_safe_zone = settings.MIN_SAFE_ZONE
        self.min_text_size = settings.MIN_TEXT_SIZE
        self.patch_size = settings.READABILITY_PATCH_SIZE

        logger.info(f"ComplianceChecker initialized (min contrast {self.min_contrast_ratio})")

    def _sample(self, canvas: np.ndarray, x: int, y: int, size: int = 1) -> Optional[Tuple[float, float, float]]:
        """
        Average RGB of a size x size patch, or None when it falls off the canvas

        Args:
            canvas: RGB array (H, W, 3)
            x, y: Top-left corner of the patch
            size: Patch edge length

        Returns:
            (r, g, b) mean or None
        """
        h, w = canvas.shape[:2]
        if x < 0 or y < 0 or x >= w or y >= h:
            return None

        patch = canvas[y:y + size, x:x + size, :3].reshape(-1, 3).astype(np.float64)
        r, g, b = patch.mean(axis=0)
        return float(r), float(g), float(b)

    def check(
        self,
        canvas: np.ndarray,
        layout: Optional[LayoutDescriptor] = None,
        has_logo: bool = False,
        format=Format.SQUARE
    ) -> List[Violation]:
        """
        Run all compliance checks

        Args:
            canvas: Rendered creative as RGB array
            layout: Layout descriptor used for the render (optional)
            has_logo: Whether a logo was placed
            format: Creative format

        Returns:
            List of violations (empty when compliant)
        """
        violations: List[Violation] = []
        h, w = canvas.shape[:2]

        text_rgb = WHITE
        if layout is not None:
            text_rgb = parse_color(layout.text_overlay.text_color)[:3]
        text_lum = luminance(*text_rgb)

        # 1. Contrast at the text anchor point (WCAG AA)
        sample = self._sample(canvas, w - 300, h - 140)
        if sample is not None:
            ratio = contrast_ratio(luminance(*sample), text_lum)
            if ratio < self.min_contrast_ratio:
                violations.append(Violation(
                    type="low-contrast",
                    severity="high",
                    message=f"Text contrast too low (ratio {ratio:.1f}, minimum {self.min_contrast_ratio} required)",
                    standard="WCAG AA",
                    fixable=True,
                ))

        # 2. Logo safe zone
        if has_logo:
            logo_rect = layout.logo.rect if layout is not None and layout.logo is not None else DEFAULT_LOGO_RECT
            if logo_rect.x < self.min_safe_zone or logo_rect.y < self.min_safe_zone:
                violations.append(Violation(
                    type="logo-safe-zone",
                    severity="medium",
                    message=f"Logo too close to edge. Minimum {self.min_safe_zone}px safe zone required.",
                    fixable=True,
                ))

        # 3. Platform rules
        for requirement in platform_requirements(format, layout):
            if not requirement.passed:
                violations.append(Violation(
                    type="platform-compliance",
                    severity=requirement.severity,
                    message=requirement.message,
                    platform=requirement.platform,
                    fixable=requirement.fixable,
                ))

        # 4. Readability of the text areas
        low_contrast_count = 0
        for x, y in [(w - 360, h - 140), (w - 200, h - 100)]:
            area = self._sample(canvas, x, y, self.patch_size)
            if area is None:
                continue
            if contrast_ratio(luminance(*area), text_lum) < self.min_contrast_ratio:
                low_contrast_count += 1

        if low_contrast_count > 0:
            violations.append(Violation(
                type="text-readability",
                severity="high",
                message=f"{low_contrast_count} text area(s) have poor readability",
                fixable=True,
            ))

        # 5. Minimum text size
        if layout is not None and layout.text_overlay.font_size < self.min_text_size:
            violations.append(Violation(
                type="text-size",
                severity="medium",
                message=f"Text size {layout.text_overlay.font_size}px below minimum {self.min_text_size}px",
                fixable=True,
            ))

        logger.info(f"Compliance check: {len(violations)} violation(s)")

        return violations
