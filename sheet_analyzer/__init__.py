"""
Sheet Analyzer - Frame detection and layout inference for sprite sheets
"""

from .core import PixelBuffer, FrameExporter, PresetManager, get_preset
from .detection import (
    DetectionMode, EmptyCellPolicy, DetectionOptions,
    Frame, FrameSize, Layout, DetectionMismatch, AnalysisResult,
    CancellationToken, AnalysisWorker,
    analyze, analyze_file, frames_or_fallback,
)
from .errors import (
    SheetAnalyzerError, InvalidBuffer, SizeExceeded, InvalidOptions,
    AnalysisCancelled, PresetError,
)

__version__ = "0.1.0"
__all__ = [
    'PixelBuffer',
    'FrameExporter',
    'PresetManager',
    'get_preset',
    'DetectionMode',
    'EmptyCellPolicy',
    'DetectionOptions',
    'Frame',
    'FrameSize',
    'Layout',
    'DetectionMismatch',
    'AnalysisResult',
    'CancellationToken',
    'AnalysisWorker',
    'analyze',
    'analyze_file',
    'frames_or_fallback',
    'SheetAnalyzerError',
    'InvalidBuffer',
    'SizeExceeded',
    'InvalidOptions',
    'AnalysisCancelled',
    'PresetError',
]
