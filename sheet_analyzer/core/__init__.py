"""
Sheet Analyzer - Core Utilities
"""

from .buffer import PixelBuffer, SUPPORTED_FORMATS
from .presets import (
    DetectionPreset, PresetManager, BUILTIN_PRESETS,
    apply_overrides, get_preset_manager, get_preset,
)
from .metadata import (
    Direction, ACTION_TYPES, Animation, SpriteSheetMetadata,
    animation_from_frames, metadata_from_result,
)
from .exporter import FrameExporter

__all__ = [
    'PixelBuffer', 'SUPPORTED_FORMATS',
    # Presets
    'DetectionPreset', 'PresetManager', 'BUILTIN_PRESETS',
    'apply_overrides', 'get_preset_manager', 'get_preset',
    # Metadata
    'Direction', 'ACTION_TYPES', 'Animation', 'SpriteSheetMetadata',
    'animation_from_frames', 'metadata_from_result',
    # Export
    'FrameExporter',
]
