"""
Custom exceptions for AI Creative Builder
"""


class InvariantViolationError(ValueError):
    """
    Raised on programmer errors inside the generation core.

    Unknown tone/objective/format values never raise; they fall back to
    their defaults. This is reserved for things like a non-positive
    variant count or an empty quote bank.
    """


class AssetNotFoundError(FileNotFoundError):
    """Raised when an uploaded asset or rendered export does not exist"""

    def __init__(self, filename: str, message: str = None):
        message = message or f"File not found: {filename}"
        super().__init__(message)
        self.asset_name = filename
        self.message = message


class UploadRejectedError(Exception):
    """Raised when an uploaded file breaks the type/size/count limits"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnsupportedPlatformError(Exception):
    """
    Raised when an export is requested for a platform/format pair that
    has no export size.
    """

    def __init__(self, platform: str, format: str, available: list = None):
        self.platform = platform
        self.format = format
        self.available = available or []
        self.message = f"Unsupported platform/format combination: {platform}/{format}"
        super().__init__(self.message)


class BackgroundRemovalError(Exception):
    """Raised when the remote background removal service fails"""
