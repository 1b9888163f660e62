"""
Layout descriptor data structures

A descriptor is plain numbers and colour strings so any renderer can paint it.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional


@dataclass
class Size:
    """Canvas size in pixels"""
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass
class Rect:
    """Axis-aligned rectangle in pixels"""
    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


@dataclass
class LogoPlacement:
    """Logo rectangle anchored to a canvas corner"""
    rect: Rect
    anchor: str  # 'top-left' or 'top-right'
    opacity: float = 0.95


@dataclass
class TextOverlay:
    """Text box placement, styling and content"""
    rect: Rect
    font_size: int
    font_weight: str
    background_color: str
    text_color: str
    alignment: str
    padding: int
    content: str
    cta_style: str


@dataclass
class Gradient:
    """Linear background gradient"""
    direction: str  # 'vertical'
    color_stops: List[str]
    opacity: float = 0.3
    type: str = "linear"


@dataclass
class Background:
    """Background fill"""
    color: str
    gradient: Optional[Gradient] = None


@dataclass
class Effects:
    """Decorative flags for the renderer"""
    shadows: bool = False
    borders: bool = False
    overlays: bool = False
    blur: bool = False


@dataclass
class ComplianceHints:
    """Limits the layout was generated against"""
    safe_zone_px: int
    max_text_coverage_px: int
    text_coverage: float
    contrast_level: str = "high"


@dataclass
class LayoutDescriptor:
    """Fully resolved layout for one creative variant"""
    id: str
    tone: str
    objective: str
    format: str
    composition: str
    canvas_size: Size
    main_asset: Rect
    text_overlay: TextOverlay
    background: Background
    compliance: ComplianceHints
    logo: Optional[LogoPlacement] = None
    effects: Effects = field(default_factory=Effects)
    asset_count: int = 1

    def to_dict(self) -> Dict:
        """Serialize to a JSON-compatible dict"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "LayoutDescriptor":
        """
        Rebuild a descriptor sent back by a client

        Args:
            data: Dict produced by to_dict()

        Returns:
            LayoutDescriptor
        """
        text = dict(data["text_overlay"])
        text["rect"] = Rect(**text["rect"])

        background = dict(data["background"])
        if background.get("gradient"):
            background["gradient"] = Gradient(**background["gradient"])

        logo = data.get("logo")
        if logo:
            logo = dict(logo)
            logo["rect"] = Rect(**logo["rect"])
            logo = LogoPlacement(**logo)

        return cls(
            id=data["id"],
            tone=data["tone"],
            objective=data["objective"],
            format=data["format"],
            composition=data["composition"],
            canvas_size=Size(**data["canvas_size"]),
            main_asset=Rect(**data["main_asset"]),
            text_overlay=TextOverlay(**text),
            background=Background(**background),
            compliance=ComplianceHints(**data["compliance"]),
            logo=logo,
            effects=Effects(**data.get("effects", {})),
            asset_count=data.get("asset_count", 1),
        )
