"""
Sheet Metadata - Animation records built from detected frames
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Dict, Any

from ..detection.frames import AnalysisResult, Frame


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


ACTION_TYPES = (
    # Movement
    'walk', 'run', 'sprint', 'crouch', 'crawl', 'jump',
    # Combat
    'attack', 'defend', 'block', 'dodge', 'cast',
    # States
    'idle', 'death', 'hurt', 'stunned',
    # Interactions
    'interact', 'pickup', 'use', 'throw',
    # Emotions
    'celebrate', 'taunt', 'emote',
)


@dataclass
class Animation:
    """A named run of consecutive frames on a sheet"""
    name: str
    action_type: str
    start_x: int
    start_y: int
    frame_start: int
    frame_count: int
    direction: Optional[Direction] = None
    frame_rate: Optional[float] = None

    def __post_init__(self):
        if not self.name.strip():
            raise ValueError("Animation name cannot be empty")
        if self.frame_start < 0:
            raise ValueError("frame_start cannot be negative")
        if self.frame_count < 1:
            raise ValueError("frame_count must be at least 1")
        if self.frame_rate is not None and self.frame_rate <= 0:
            raise ValueError("frame_rate must be positive")

    @property
    def frame_end(self) -> int:
        """Exclusive end index"""
        return self.frame_start + self.frame_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'action_type': self.action_type,
            'direction': self.direction.value if self.direction else None,
            'start_x': self.start_x,
            'start_y': self.start_y,
            'frame_start': self.frame_start,
            'frame_count': self.frame_count,
            'frame_rate': self.frame_rate,
        }


@dataclass
class SpriteSheetMetadata:
    """Frame dimensions and animation list for a sheet"""
    name: str
    frame_width: int
    frame_height: int
    total_frames: int
    animations: List[Animation] = field(default_factory=list)

    def add_animation(self, animation: Animation) -> None:
        if animation.frame_end > self.total_frames:
            raise ValueError(
                f"Animation '{animation.name}' ends at frame {animation.frame_end}, "
                f"sheet has {self.total_frames}"
            )
        self.animations.append(animation)

    def get_animation(self, name: str) -> Optional[Animation]:
        for animation in self.animations:
            if animation.name == name:
                return animation
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'frame_width': self.frame_width,
            'frame_height': self.frame_height,
            'total_frames': self.total_frames,
            'animations': [a.to_dict() for a in self.animations],
        }


def animation_from_frames(
    name: str,
    action_type: str,
    frames: Sequence[Frame],
    frame_start: int = 0,
    frame_count: Optional[int] = None,
    direction: Optional[Direction] = None,
    frame_rate: Optional[float] = None,
) -> Animation:
    """
    Build an animation over frames[frame_start:frame_start + frame_count].

    The start position is taken from the first frame of the range.
    frame_count defaults to every frame from frame_start onwards.
    """
    if frame_count is None:
        frame_count = len(frames) - frame_start
    if frame_start < 0 or frame_count < 1 or frame_start + frame_count > len(frames):
        raise ValueError(
            f"Frame range {frame_start}+{frame_count} is outside the {len(frames)} detected frames"
        )

    first = frames[frame_start]
    return Animation(
        name=name,
        action_type=action_type,
        start_x=first.x,
        start_y=first.y,
        frame_start=frame_start,
        frame_count=frame_count,
        direction=direction,
        frame_rate=frame_rate,
    )


def metadata_from_result(name: str, result: AnalysisResult) -> SpriteSheetMetadata:
    """Sheet metadata sized from an analysis result"""
    return SpriteSheetMetadata(
        name=name,
        frame_width=result.suggested_frame_size.width,
        frame_height=result.suggested_frame_size.height,
        total_frames=result.frame_count,
    )
