"""
AI Creative Builder Modules
"""

from .layout import LayoutEngine
from .quotes import QuoteResolver
from .renderer import Renderer
from .compliance import ComplianceChecker
from .exporter import PlatformExporter
from .asset_store import AssetStore
from .background_remover import BackgroundRemover

__all__ = [
    "LayoutEngine",
    "QuoteResolver",
    "Renderer",
    "ComplianceChecker",
    "PlatformExporter",
    "AssetStore",
    "BackgroundRemover",
]
