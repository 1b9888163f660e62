"""
Configuration settings for AI Creative Builder
"""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Project paths
    PROJECT_ROOT: Path = Path(__file__).parent
    WORKSPACE_DIR: Path = PROJECT_ROOT / "workspace"
    UPLOADS_DIR: Path = WORKSPACE_DIR / "uploads"
    EXPORTS_DIR: Path = WORKSPACE_DIR / "exports"
    ASSETS_DIR: Path = PROJECT_ROOT / "assets"
    FONTS_DIR: Path = ASSETS_DIR / "fonts"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # Upload limits
    MAX_UPLOAD_SIZE_MB: int = 10
    MAX_UPLOAD_FILES: int = 10

    # Variant / quote generation
    DEFAULT_VARIANT_COUNT: int = 6
    DEFAULT_QUOTE_COUNT: int = 5
    MAX_QUOTE_COUNT: int = 10

    # Platform normalization
    # False = only the near edge of the main asset is re-clamped (historic behaviour)
    NORMALIZE_CLAMP_FAR_EDGE: bool = False

    # Rendering
    FONT_REGULAR: str = "DejaVuSans.ttf"
    FONT_BOLD: str = "DejaVuSans-Bold.ttf"
    SHOW_SAFE_AREA_GUIDE: bool = True
    SAFE_AREA_GUIDE_COLOR: str = "rgba(255,255,255,0.2)"
    SAFE_AREA_GUIDE_WIDTH: int = 2

    # Compliance thresholds
    MIN_CONTRAST_RATIO: float = 4.5  # WCAG AA
    MIN_SAFE_ZONE: int = 40  # pixels from edge
    MIN_TEXT_SIZE: int = 24
    META_MAX_TEXT_COVERAGE: float = 0.2
    READABILITY_PATCH_SIZE: int = 10

    # Contrast auto-fix band, offsets from the bottom-right corner
    CONTRAST_FIX_COLOR: str = "rgba(0,0,0,0.35)"
    CONTRAST_FIX_BAND: tuple[int, int, int, int] = (420, 200, 380, 120)  # (right, bottom, width, height)

    # Platform export
    EXPORT_BACKGROUND: tuple[int, int, int] = (255, 255, 255)
    EXPORT_PNG_COMPRESSION: int = 9

    # remove.bg settings
    REMOVE_BG_API_KEY: str = ""
    REMOVE_BG_URL: str = "https://api.remove.bg/v1.0/removebg"
    REMOVE_BG_TIMEOUT: float = 60.0

    # FastAPI settings
    API_TITLE: str = "AI Creative Builder API"
    API_VERSION: str = "1.0.0"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3001

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()

# Create directories if they don't exist
for directory in [
    settings.UPLOADS_DIR,
    settings.EXPORTS_DIR,
    settings.FONTS_DIR,
    settings.LOGS_DIR,
]:
    directory.mkdir(parents=True, exist_ok=True)
