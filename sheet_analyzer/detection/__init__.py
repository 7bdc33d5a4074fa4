"""
Detection System - Frame extraction and layout inference
"""

from .options import DetectionMode, EmptyCellPolicy, DetectionOptions
from .frames import (
    Frame, FrameSize, Layout, DetectionMismatch, AnalysisResult, DEFAULT_FRAME_SIZE,
)
from .sampler import PixelSampler
from .border import BorderClassifier
from .detector import FrameDetector, Strategy, uniform_frames, synthesize_manual
from .ordering import order_frames, row_tolerance_for
from .layout import analyze_layout, most_common_size
from .cancellation import CancellationToken
from .analyzer import analyze, analyze_file, frames_or_fallback
from .worker import AnalysisWorker

__all__ = [
    # Options
    'DetectionMode', 'EmptyCellPolicy', 'DetectionOptions',
    # Results
    'Frame', 'FrameSize', 'Layout', 'DetectionMismatch', 'AnalysisResult',
    'DEFAULT_FRAME_SIZE',
    # Components
    'PixelSampler', 'BorderClassifier', 'FrameDetector', 'Strategy',
    'uniform_frames', 'synthesize_manual',
    'order_frames', 'row_tolerance_for',
    'analyze_layout', 'most_common_size',
    # Entry points
    'CancellationToken', 'analyze', 'analyze_file', 'frames_or_fallback',
    'AnalysisWorker',
]
