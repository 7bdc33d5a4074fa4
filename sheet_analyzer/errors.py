"""
Custom exceptions for sprite sheet analysis.

Only buffer problems abort an analysis. Everything else a detector can run
into is reported on the AnalysisResult so previews always get frames back.
"""

from typing import Optional


class SheetAnalyzerError(Exception):
    """Base exception for all sprite sheet analysis errors."""
    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class InvalidBuffer(SheetAnalyzerError):
    """Raised when a pixel buffer has unusable dimensions or data."""
    def __init__(self, message: str, width: Optional[int] = None,
                 height: Optional[int] = None, *args: object) -> None:
        super().__init__(message, *args)
        self.width = width
        self.height = height


class SizeExceeded(SheetAnalyzerError):
    """Raised when a buffer is larger than the configured pixel guard."""
    def __init__(self, message: str, pixel_count: Optional[int] = None,
                 limit: Optional[int] = None, *args: object) -> None:
        super().__init__(message, *args)
        self.pixel_count = pixel_count
        self.limit = limit


class InvalidOptions(SheetAnalyzerError, ValueError):
    """Raised when detection options fail validation."""
    def __init__(self, message: str, field: Optional[str] = None, *args: object) -> None:
        super().__init__(message, *args)
        self.field = field


class AnalysisCancelled(SheetAnalyzerError):
    """Raised inside a scan whose cancellation token was triggered."""


class PresetError(SheetAnalyzerError):
    """Raised for unknown presets or malformed preset files."""
