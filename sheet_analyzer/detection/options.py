"""
Detection Options - How frames should be found on a sheet

Options are supplied fresh for every analysis call (the configuration UI may
change them while the user tweaks modes or offsets), so they are validated
on construction and never mutated afterwards.
"""

from dataclasses import dataclass, field, asdict, fields
from enum import Enum
from typing import Optional, Dict, Any
import logging

from ..errors import InvalidOptions

logger = logging.getLogger(__name__)


DEFAULT_MIN_SIZE = 8
DEFAULT_ALPHA_THRESHOLD = 10
DEFAULT_BLACK_THRESHOLD = 15
DEFAULT_MAX_PIXELS = 4096 * 4096

GRID_HINT_FIELDS = ('expected_frame_width', 'expected_frame_height', 'expected_frame_count')
INTEGER_FIELDS = GRID_HINT_FIELDS + (
    'min_width', 'min_height', 'alpha_threshold', 'black_threshold',
    'manual_offset_x', 'manual_offset_y', 'max_pixels',
)


class DetectionMode(Enum):
    """What counts as sprite content"""
    ALPHA = "alpha"
    BLACK_BORDER = "black_border"
    MANUAL = "manual"

    @classmethod
    def from_string(cls, value: str) -> 'DetectionMode':
        """Parse 'alpha', 'black-border', 'blackBorder' etc."""
        normalized = value.strip().lower().replace('-', '_')
        if normalized == 'blackborder':
            normalized = 'black_border'
        for mode in cls:
            if mode.value == normalized:
                return mode
        supported = [m.value for m in cls]
        raise InvalidOptions(
            f"Unknown detection mode: {value}. Supported modes: {', '.join(supported)}",
            field='mode'
        )


class EmptyCellPolicy(Enum):
    """What grid-scan does with a cell that holds no content pixels"""
    FULL_CELL = "full_cell"  # emit the untrimmed cell
    DROP = "drop"

    @classmethod
    def from_string(cls, value: str) -> 'EmptyCellPolicy':
        normalized = value.strip().lower().replace('-', '_')
        aliases = {'full': 'full_cell', 'fullcell': 'full_cell'}
        normalized = aliases.get(normalized, normalized)
        for policy in cls:
            if policy.value == normalized:
                return policy
        raise InvalidOptions(f"Unknown empty cell policy: {value}", field='empty_cell_policy')


@dataclass(frozen=True)
class DetectionOptions:
    """
    Per-call detection settings.

    Grid-scan runs when all three expected_frame_* values are given,
    flood-fill when they are absent. MANUAL mode skips pixel inspection
    and needs all three.
    """

    mode: DetectionMode = field(default=DetectionMode.ALPHA)

    # Grid hints
    expected_frame_width: Optional[int] = field(default=None)
    expected_frame_height: Optional[int] = field(default=None)
    expected_frame_count: Optional[int] = field(default=None)

    # Candidate filtering
    min_width: int = field(default=DEFAULT_MIN_SIZE)
    min_height: int = field(default=DEFAULT_MIN_SIZE)
    alpha_threshold: int = field(default=DEFAULT_ALPHA_THRESHOLD)
    black_threshold: int = field(default=DEFAULT_BLACK_THRESHOLD)

    # Manual synthesis
    manual_offset_x: int = field(default=0)
    manual_offset_y: int = field(default=0)

    empty_cell_policy: EmptyCellPolicy = field(default=EmptyCellPolicy.FULL_CELL)

    # Resource guard
    max_pixels: int = field(default=DEFAULT_MAX_PIXELS)

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.validate()
        logger.debug("Detection options initialized: %s", self)

    def validate(self) -> None:
        """
        Validate option values.

        Raises:
            InvalidOptions: If any option has the wrong type or is out of range
        """
        if not isinstance(self.mode, DetectionMode):
            raise InvalidOptions(f"Invalid detection mode: {self.mode!r}", field='mode')
        if not isinstance(self.empty_cell_policy, EmptyCellPolicy):
            raise InvalidOptions(
                f"Invalid empty cell policy: {self.empty_cell_policy!r}",
                field='empty_cell_policy'
            )

        for name in INTEGER_FIELDS:
            value = getattr(self, name)
            if value is None and name in GRID_HINT_FIELDS:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidOptions(f"{name} must be an integer, got {value!r}", field=name)

        for name in ('alpha_threshold', 'black_threshold'):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise InvalidOptions(f"{name} must be between 0 and 255, got {value}", field=name)

        for name in ('min_width', 'min_height'):
            if getattr(self, name) < 1:
                raise InvalidOptions(f"{name} must be at least 1", field=name)

        for name in GRID_HINT_FIELDS:
            value = getattr(self, name)
            if value is not None and value < 1:
                raise InvalidOptions(f"{name} must be at least 1, got {value}", field=name)

        for name in ('manual_offset_x', 'manual_offset_y'):
            if getattr(self, name) < 0:
                raise InvalidOptions(f"{name} cannot be negative", field=name)

        if self.max_pixels < 1:
            raise InvalidOptions("max_pixels must be at least 1", field='max_pixels')

        if self.mode is DetectionMode.MANUAL and not self.uses_grid:
            raise InvalidOptions(
                "Manual mode needs expected frame width, height and count",
                field='mode'
            )

    @property
    def uses_grid(self) -> bool:
        """True when every grid hint is present"""
        return (
            self.expected_frame_width is not None
            and self.expected_frame_height is not None
            and self.expected_frame_count is not None
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['mode'] = self.mode.value
        data['empty_cell_policy'] = self.empty_cell_policy.value
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DetectionOptions':
        """Build options from a plain mapping (preset files, JSON)"""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidOptions(f"Unknown detection options: {', '.join(sorted(unknown))}")

        values = dict(data)
        if isinstance(values.get('mode'), str):
            values['mode'] = DetectionMode.from_string(values['mode'])
        if isinstance(values.get('empty_cell_policy'), str):
            values['empty_cell_policy'] = EmptyCellPolicy.from_string(values['empty_cell_policy'])
        return cls(**values)
