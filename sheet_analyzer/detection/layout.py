"""
Layout Analyzer - Classifies ordered frames as a row, a column or a grid
"""

import math
from typing import Dict, Sequence, Tuple

from .frames import Frame, FrameSize, Layout, DEFAULT_FRAME_SIZE


def most_common_size(frames: Sequence[Frame]) -> FrameSize:
    """Most frequent (width, height); ties go to the first one seen"""
    counts: Dict[FrameSize, int] = {}
    for frame in frames:
        counts[frame.size] = counts.get(frame.size, 0) + 1

    best = DEFAULT_FRAME_SIZE
    best_count = 0
    # dicts keep insertion order, so a strict > keeps the earliest on ties
    for size, count in counts.items():
        if count > best_count:
            best, best_count = size, count
    return best


def analyze_layout(frames: Sequence[Frame], tolerance: float) -> Tuple[FrameSize, Layout, int, int]:
    """
    Infer (suggested_frame_size, layout, rows, columns) from ordered frames.

    An empty list gives the 32x32 single-row default rather than an error.
    """
    if not frames:
        return DEFAULT_FRAME_SIZE, Layout.HORIZONTAL, 1, 0

    suggested = most_common_size(frames)
    first = frames[0]
    total = len(frames)

    first_row = sum(1 for f in frames if abs(f.y - first.y) < tolerance)
    first_col = sum(1 for f in frames if abs(f.x - first.x) < tolerance)

    if first_row == total:
        return suggested, Layout.HORIZONTAL, 1, total
    if first_col == total:
        return suggested, Layout.VERTICAL, total, 1

    columns = first_row
    rows = math.ceil(total / columns)
    return suggested, Layout.GRID, rows, columns
