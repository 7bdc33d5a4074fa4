"""
Frame Orderer - Reading order (rows top to bottom, left to right) for frames
"""

import math
from typing import Iterable, List, Tuple

from .frames import Frame
from .options import DetectionOptions

# Row tolerance when no expected frame height is known
FLOOD_FILL_ROW_TOLERANCE = 5


def row_tolerance_for(options: DetectionOptions) -> float:
    """Half the expected frame height in grid mode, a fixed 5px otherwise"""
    if options.uses_grid:
        return options.expected_frame_height / 2
    return FLOOD_FILL_ROW_TOLERANCE


def row_band(y: int, row_tolerance: float) -> int:
    """Row index of a y coordinate; halves round up"""
    return math.floor(y / row_tolerance + 0.5)


def sort_key(frame: Frame, row_tolerance: float) -> Tuple[int, int, int, int, int]:
    """
    Projection key for one frame.

    Each frame is mapped to its row band independently, so the ordering is
    a strict total order. A pairwise "same row if |dy| < tolerance"
    comparator is not transitive and must not be used with sort().
    """
    return (row_band(frame.y, row_tolerance), frame.x, frame.y, frame.width, frame.height)


def order_frames(frames: Iterable[Frame], row_tolerance: float) -> List[Frame]:
    if row_tolerance <= 0:
        raise ValueError("row_tolerance must be positive")
    return sorted(frames, key=lambda f: sort_key(f, row_tolerance))
