"""
Design Tables - Static lookup tables for tone, objective and format presets

All tables are built once at import time and exposed read-only.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


class _Preset(str, Enum):
    """String enum that falls back to a default member for unknown values"""

    @classmethod
    def default(cls) -> "_Preset":
        """
        Member used for unrecognized values

        Every preset enum overrides this; the base class has no members of its own.
        """
        raise NotImplementedError(f"{cls.__name__} must define default()")

    @classmethod
    def coerce(cls, value) -> "_Preset":
        """
        Map any incoming value onto a member

        Args:
            value: Raw value from a request (string, member or None)

        Returns:
            Matching member, or the default member if unrecognized
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.default()


class Tone(_Preset):
    NEUTRAL = "neutral"
    BOLD = "bold"
    PLAYFUL = "playful"
    PREMIUM = "premium"

    @classmethod
    def default(cls) -> "Tone":
        return cls.NEUTRAL


class Objective(_Preset):
    AWARENESS = "awareness"
    CONVERSION = "conversion"
    SALES = "sales"

    @classmethod
    def default(cls) -> "Objective":
        return cls.AWARENESS


class Format(_Preset):
    SQUARE = "square"
    STORY = "story"
    BANNER = "banner"

    @classmethod
    def default(cls) -> "Format":
        return cls.SQUARE


class Composition(str, Enum):
    CENTERED = "centered"
    BALANCED = "balanced"
    PRODUCT_FOCUSED = "product-focused"


class CtaStyle(str, Enum):
    SUBTLE = "subtle"
    PROMINENT = "prominent"
    URGENT = "urgent"


GOLDEN_RATIO = 1.618
RULE_OF_THIRDS = (0.33, 0.66)


@dataclass(frozen=True)
class ToneParameters:
    """Visual style for a brand tone"""
    background: Tuple[str, str, str]
    accent: Tuple[str, str, str]
    text: Tuple[str, str]
    font_weight: str
    font_style: str
    balance: float
    dynamism: float


@dataclass(frozen=True)
class ObjectiveStrategy:
    """Composition strategy for a marketing objective"""
    focus: str
    image_size: float
    text_size: float
    cta_style: CtaStyle
    composition: str
    image_weight: float
    text_weight: float


@dataclass(frozen=True)
class FormatSpec:
    """Canvas preset for a target format"""
    width: int
    height: int
    safe_zone: int
    max_text_coverage: float
    composition_rules: Tuple[str, str]
    optimal_image_ratio: float


@dataclass(frozen=True)
class TextStyle:
    """Text box styling for a call-to-action style"""
    font_size: int
    font_weight: str
    background_color: str
    padding: int


TONE_PARAMETERS: Mapping[Tone, ToneParameters] = MappingProxyType({
    Tone.NEUTRAL: ToneParameters(
        background=("#ffffff", "#f8f9fa", "#e9ecef"),
        accent=("#6c757d", "#495057", "#343a40"),
        text=("#212529", "#495057"),
        font_weight="normal",
        font_style="clean",
        balance=0.5,
        dynamism=0.3,
    ),
    Tone.BOLD: ToneParameters(
        background=("#0f172a", "#1e293b", "#334155"),
        accent=("#f59e0b", "#ef4444", "#8b5cf6"),
        text=("#ffffff", "#f1f5f9"),
        font_weight="bold",
        font_style="impact",
        balance=0.4,
        dynamism=0.8,
    ),
    Tone.PLAYFUL: ToneParameters(
        background=("#fef3c7", "#fde68a", "#fcd34d"),
        accent=("#ec4899", "#8b5cf6", "#06b6d4"),
        text=("#1f2937", "#374151"),
        font_weight="medium",
        font_style="rounded",
        balance=0.6,
        dynamism=0.7,
    ),
    Tone.PREMIUM: ToneParameters(
        background=("#111827", "#1f2937", "#374151"),
        accent=("#d4af37", "#fbbf24", "#f59e0b"),
        text=("#ffffff", "#f3f4f6"),
        font_weight="medium",
        font_style="elegant",
        balance=0.5,
        dynamism=0.4,
    ),
})

OBJECTIVE_STRATEGIES: Mapping[Objective, ObjectiveStrategy] = MappingProxyType({
    Objective.AWARENESS: ObjectiveStrategy(
        focus="visual-impact",
        image_size=0.75,
        text_size=0.25,
        cta_style=CtaStyle.SUBTLE,
        composition=Composition.CENTERED.value,
        image_weight=0.8,
        text_weight=0.2,
    ),
    Objective.CONVERSION: ObjectiveStrategy(
        focus="call-to-action",
        image_size=0.6,
        text_size=0.4,
        cta_style=CtaStyle.PROMINENT,
        composition=Composition.BALANCED.value,
        image_weight=0.6,
        text_weight=0.4,
    ),
    Objective.SALES: ObjectiveStrategy(
        focus="product-prominence",
        image_size=0.7,
        text_size=0.3,
        cta_style=CtaStyle.URGENT,
        composition=Composition.PRODUCT_FOCUSED.value,
        image_weight=0.75,
        text_weight=0.25,
    ),
})

FORMAT_SPECS: Mapping[Format, FormatSpec] = MappingProxyType({
    Format.SQUARE: FormatSpec(
        width=1080,
        height=1080,
        safe_zone=40,
        max_text_coverage=0.2,
        composition_rules=("center-focused", "symmetrical"),
        optimal_image_ratio=1.0,
    ),
    Format.STORY: FormatSpec(
        width=1080,
        height=1920,
        safe_zone=60,
        max_text_coverage=0.15,
        composition_rules=("vertical-flow", "top-heavy"),
        optimal_image_ratio=0.5625,
    ),
    Format.BANNER: FormatSpec(
        width=1200,
        height=628,
        safe_zone=30,
        max_text_coverage=0.25,
        composition_rules=("horizontal-flow", "left-to-right"),
        optimal_image_ratio=1.91,
    ),
})

TEXT_STYLES: Mapping[CtaStyle, TextStyle] = MappingProxyType({
    CtaStyle.SUBTLE: TextStyle(font_size=28, font_weight="medium", background_color="rgba(0,0,0,0.4)", padding=16),
    CtaStyle.PROMINENT: TextStyle(font_size=36, font_weight="bold", background_color="rgba(0,0,0,0.7)", padding=20),
    CtaStyle.URGENT: TextStyle(font_size=32, font_weight="bold", background_color="rgba(239,68,68,0.9)", padding=18),
})

# Background palette index by objective focus
FOCUS_BACKGROUND_INDEX: Mapping[str, int] = MappingProxyType({
    "visual-impact": 0,
    "call-to-action": 1,
})

LAYOUT_DESCRIPTIONS: Mapping[Objective, Mapping[Tone, str]] = MappingProxyType({
    Objective.AWARENESS: MappingProxyType({
        Tone.NEUTRAL: "Clean, balanced composition optimized for brand awareness and recognition",
        Tone.BOLD: "High-impact design with strong visual presence for maximum awareness",
        Tone.PLAYFUL: "Engaging, vibrant layout designed to capture attention and build brand recall",
        Tone.PREMIUM: "Sophisticated, elegant design that elevates brand perception",
    }),
    Objective.CONVERSION: MappingProxyType({
        Tone.NEUTRAL: "Conversion-focused layout with clear call-to-action and balanced visual hierarchy",
        Tone.BOLD: "Dynamic design with prominent CTA optimized for click-through rates",
        Tone.PLAYFUL: "Engaging layout that guides users toward conversion with friendly, approachable design",
        Tone.PREMIUM: "Refined design that builds trust and encourages premium conversions",
    }),
    Objective.SALES: MappingProxyType({
        Tone.NEUTRAL: "Product-focused layout highlighting key features and value proposition",
        Tone.BOLD: "Urgent, action-oriented design optimized for immediate sales conversion",
        Tone.PLAYFUL: "Exciting, energetic layout that creates urgency and drives sales",
        Tone.PREMIUM: "Luxury-focused design that emphasizes quality and exclusivity",
    }),
})


def get_format_spec(format) -> FormatSpec:
    """Look up the canvas preset for a (possibly unknown) format value"""
    return FORMAT_SPECS[Format.coerce(format)]
