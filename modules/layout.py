"""
Layout Engine - Resolve tone/objective/format presets into creative layouts
"""

import random
import time
from typing import Dict, List, Optional
from uuid import uuid4
from loguru import logger

from modules.descriptor import (
    Background,
    ComplianceHints,
    Effects,
    Gradient,
    LayoutDescriptor,
    LogoPlacement,
    Rect,
    Size,
    TextOverlay,
)
from modules.design_tables import (
    FOCUS_BACKGROUND_INDEX,
    FORMAT_SPECS,
    GOLDEN_RATIO,
    LAYOUT_DESCRIPTIONS,
    OBJECTIVE_STRATEGIES,
    RULE_OF_THIRDS,
    TEXT_STYLES,
    TONE_PARAMETERS,
    Composition,
    Format,
    FormatSpec,
    Objective,
    ObjectiveStrategy,
    Tone,
    ToneParameters,
)
from modules.platform import normalize
from modules.quotes import QuoteResolver, detect_ai_theme
from utils.exceptions import InvariantViolationError

LOGO_WIDTH = 140
LOGO_HEIGHT = 50

# Maximum jitter of the free-form composition, as a fraction of canvas size
JITTER_RANGE = 0.3


class LayoutEngine:
    """
    Resolves layouts from the tone, objective and format lookup tables
    Compositions: centered (awareness), balanced (conversion), product-focused (sales)
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        quote_resolver: Optional[QuoteResolver] = None
    ):
        """
        Initialize Layout Engine

        Args:
            rng: Random source for free-form jitter and logo corner (unseeded if None)
            quote_resolver: Quote resolver (shares rng if None)
        """
        self.rng = rng or random.Random()
        self.quote_resolver = quote_resolver or QuoteResolver(rng=self.rng)

        logger.info("LayoutEngine initialized")

    def resolve(
        self,
        tone=Tone.NEUTRAL,
        objective=Objective.AWARENESS,
        format=Format.SQUARE,
        variant_index: int = 0,
        variant_count: int = 1,
        has_logo: bool = False,
        assets: Optional[List] = None,
        metadata: Optional[Dict] = None,
        asset_count: int = 1
    ) -> LayoutDescriptor:
        """
        Create a complete layout descriptor

        Unknown tone/objective/format values silently fall back to
        neutral/awareness/square.

        Args:
            tone: Brand tone
            objective: Marketing objective
            format: Target format
            variant_index: Position of this variant (drives quote selection)
            variant_count: Total number of variants being generated
            has_logo: Place a logo slot
            assets: Uploaded assets (names feed AI-theme detection)
            metadata: Optional description/title/tags
            asset_count: Number of assets supplied

        Returns:
            LayoutDescriptor normalized for its format
        """
        tone = Tone.coerce(tone)
        objective = Objective.coerce(objective)
        format = Format.coerce(format)

        tone_params = TONE_PARAMETERS[tone]
        strategy = OBJECTIVE_STRATEGIES[objective]
        spec = FORMAT_SPECS[format]

        canvas = Size(width=spec.width, height=spec.height)

        main_asset = self._place_main_asset(canvas, strategy.composition, strategy.image_size, spec.safe_zone, tone_params.dynamism)
        logo = self._place_logo(canvas, spec.safe_zone) if has_logo else None

        is_ai_themed = detect_ai_theme(assets, metadata)
        text_overlay = self._create_text_overlay(
            canvas, strategy, tone, tone_params, objective, is_ai_themed, variant_index, variant_count
        )

        descriptor = LayoutDescriptor(
            id=self._generate_id(),
            tone=tone.value,
            objective=objective.value,
            format=format.value,
            composition=strategy.composition,
            canvas_size=canvas,
            main_asset=main_asset,
            text_overlay=text_overlay,
            background=self._create_background(tone_params, strategy, format),
            compliance=self._create_compliance_hints(canvas, spec, strategy),
            logo=logo,
            effects=self._create_effects(tone, objective),
            asset_count=asset_count,
        )

        logger.debug(
            f"Resolved {tone.value}/{objective.value}/{format.value} variant {variant_index}: "
            f"{strategy.composition}, main={main_asset}, quote='{text_overlay.content}'"
        )

        return normalize(descriptor, format)

    def generate_variants(
        self,
        tone=Tone.NEUTRAL,
        objective=Objective.AWARENESS,
        format=Format.SQUARE,
        asset_count: int = 1,
        has_logo: bool = False,
        count: int = 6,
        assets: Optional[List] = None,
        metadata: Optional[Dict] = None
    ) -> List[LayoutDescriptor]:
        """
        Generate several layout variants for the same inputs

        Args:
            tone: Brand tone
            objective: Marketing objective
            format: Target format
            asset_count: Number of assets supplied
            has_logo: Place a logo slot
            count: Number of variants
            assets: Uploaded assets
            metadata: Optional description/title/tags

        Returns:
            List of descriptors, each normalized for format
        """
        if count <= 0:
            raise InvariantViolationError(f"count must be positive, got {count}")

        variants = [
            self.resolve(
                tone=tone,
                objective=objective,
                format=format,
                variant_index=i,
                variant_count=count,
                has_logo=has_logo,
                assets=assets,
                metadata=metadata,
                asset_count=asset_count,
            )
            for i in range(count)
        ]

        logger.info(f"✅ Generated {len(variants)} layout variants")

        return variants

    def describe(self, descriptor: LayoutDescriptor) -> str:
        """
        Human-readable description of a layout

        Args:
            descriptor: Layout descriptor

        Returns:
            Description string
        """
        objective = Objective.coerce(descriptor.objective)
        tone = Tone.coerce(descriptor.tone)
        description = LAYOUT_DESCRIPTIONS.get(objective, {}).get(tone)

        return description or (
            f"AI-optimized {descriptor.tone} layout for {descriptor.objective} on {descriptor.format} format"
        )

    def _generate_id(self) -> str:
        return f"gen-{int(time.time() * 1000)}-{uuid4().hex[:9]}"

    def _place_main_asset(
        self,
        canvas: Size,
        composition: str,
        image_size: float,
        safe_zone: int,
        dynamism: float
    ) -> Rect:
        """
        Position the main asset using the composition's placement formula

        Args:
            canvas: Canvas size
            composition: Strategy name
            image_size: Asset size as a fraction of canvas
            safe_zone: Margin from every edge
            dynamism: Tone jitter coefficient (free-form composition only)

        Returns:
            Rect clamped inside the safe zone
        """
        width, height = canvas.width, canvas.height
        asset_w = width * image_size
        asset_h = height * image_size

        if composition == Composition.CENTERED:
            x = (width - asset_w) / 2
            y = (height - asset_h) / 2
        elif composition == Composition.BALANCED:
            x = width / GOLDEN_RATIO - asset_w / 2
            y = height * 0.2
        elif composition == Composition.PRODUCT_FOCUSED:
            x = width * RULE_OF_THIRDS[0]
            y = height * RULE_OF_THIRDS[0]
        else:
            # Free-form: centered, then jittered by the tone's dynamism
            offset_x = (self.rng.random() - 0.5) * dynamism * width * JITTER_RANGE
            offset_y = (self.rng.random() - 0.5) * dynamism * height * JITTER_RANGE
            x = (width - asset_w) / 2 + offset_x
            y = (height - asset_h) / 2 + offset_y

        x = max(safe_zone, min(x, width - asset_w - safe_zone))
        y = max(safe_zone, min(y, height - asset_h - safe_zone))

        return Rect(x=int(x), y=int(y), width=int(asset_w), height=int(asset_h))

    def _place_logo(self, canvas: Size, safe_zone: int) -> LogoPlacement:
        """
        Place the logo in the top-left or top-right corner

        Args:
            canvas: Canvas size
            safe_zone: Margin from every edge

        Returns:
            LogoPlacement
        """
        positions = [
            (safe_zone, "top-left"),
            (canvas.width - LOGO_WIDTH - safe_zone, "top-right"),
        ]
        x, anchor = self.rng.choice(positions)

        return LogoPlacement(
            rect=Rect(x=x, y=safe_zone, width=LOGO_WIDTH, height=LOGO_HEIGHT),
            anchor=anchor,
        )

    def _create_text_overlay(
        self,
        canvas: Size,
        strategy: ObjectiveStrategy,
        tone: Tone,
        tone_params: ToneParameters,
        objective: Objective,
        is_ai_themed: bool,
        variant_index: int,
        variant_count: int
    ) -> TextOverlay:
        """
        Build the text box with its quote and call-to-action styling

        Args:
            canvas: Canvas size
            strategy: Objective strategy
            tone: Brand tone
            tone_params: Tone parameters
            objective: Marketing objective
            is_ai_themed: Use AI-themed quotes
            variant_index: Position of this variant
            variant_count: Total number of variants

        Returns:
            TextOverlay
        """
        quote = self.quote_resolver.resolve(tone, objective, is_ai_themed, variant_index, variant_count)
        quote = self.quote_resolver.embellish(quote, tone)

        width, height = canvas.width, canvas.height
        if strategy.composition == Composition.CENTERED:
            text_x, text_y, text_w, text_h = width * 0.1, height * 0.85, width * 0.8, height * 0.1
        elif strategy.composition == Composition.BALANCED:
            text_x, text_y, text_w, text_h = width * 0.55, height * 0.5, width * 0.4, height * 0.2
        else:
            text_x, text_y, text_w, text_h = width * 0.1, height * 0.8, width * 0.8, height * 0.15

        style = TEXT_STYLES[strategy.cta_style]

        return TextOverlay(
            rect=Rect(x=int(text_x), y=int(text_y), width=int(text_w), height=int(text_h)),
            font_size=style.font_size,
            font_weight=style.font_weight,
            background_color=style.background_color,
            text_color=tone_params.text[0],
            alignment="center",
            padding=style.padding,
            content=quote,
            cta_style=strategy.cta_style.value,
        )

    def _create_background(self, tone_params: ToneParameters, strategy: ObjectiveStrategy, format: Format) -> Background:
        palette = tone_params.background
        color = palette[FOCUS_BACKGROUND_INDEX.get(strategy.focus, 2)]

        gradient = None
        if format is Format.STORY:
            gradient = Gradient(direction="vertical", color_stops=[palette[0], palette[1]])

        return Background(color=color, gradient=gradient)

    def _create_effects(self, tone: Tone, objective: Objective) -> Effects:
        return Effects(
            shadows=tone in (Tone.PREMIUM, Tone.BOLD),
            borders=tone is Tone.PLAYFUL,
            overlays=objective is Objective.CONVERSION,
            blur=False,
        )

    def _create_compliance_hints(self, canvas: Size, spec: FormatSpec, strategy: ObjectiveStrategy) -> ComplianceHints:
        return ComplianceHints(
            safe_zone_px=spec.safe_zone,
            max_text_coverage_px=int(canvas.area * spec.max_text_coverage),
            text_coverage=strategy.text_size,
        )
