"""
Frame model - Rectangles recovered from a sprite sheet and the analysis result
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Optional, Dict, Any


@dataclass(frozen=True)
class Frame:
    """A rectangular sub-region of a sheet holding one animation frame"""
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Frame origin cannot be negative: ({self.x}, {self.y})")
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Frame size must be positive: {self.width}x{self.height}")

    @property
    def right(self) -> int:
        """Exclusive right edge"""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge"""
        return self.y + self.height

    @property
    def size(self) -> 'FrameSize':
        return FrameSize(self.width, self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    def to_dict(self) -> Dict[str, int]:
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}


@dataclass(frozen=True)
class FrameSize:
    width: int
    height: int

    def to_dict(self) -> Dict[str, int]:
        return {'width': self.width, 'height': self.height}


DEFAULT_FRAME_SIZE = FrameSize(32, 32)


class Layout(Enum):
    """Arrangement of frames on the sheet"""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    GRID = "grid"


@dataclass(frozen=True)
class DetectionMismatch:
    """Grid-scan accepted a different number of cells than expected"""
    expected: int
    found: int

    @property
    def shortfall(self) -> int:
        return max(0, self.expected - self.found)

    @property
    def surplus(self) -> int:
        return max(0, self.found - self.expected)


@dataclass(frozen=True)
class AnalysisResult:
    """Complete analysis of one sheet"""
    frames: Tuple[Frame, ...]
    suggested_frame_size: FrameSize
    layout: Layout
    rows: int
    columns: int
    mismatch: Optional[DetectionMismatch] = None

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def no_content(self) -> bool:
        """True when nothing was detected"""
        return not self.frames

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'frames': [f.to_dict() for f in self.frames],
            'suggested_frame_size': self.suggested_frame_size.to_dict(),
            'layout': self.layout.value,
            'rows': self.rows,
            'columns': self.columns,
        }
        if self.mismatch is not None:
            data['mismatch'] = {
                'expected': self.mismatch.expected,
                'found': self.mismatch.found,
            }
        return data
