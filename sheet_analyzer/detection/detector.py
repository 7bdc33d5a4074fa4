"""
Frame Detector - Finds candidate frames on a sprite sheet

Three strategies:
    grid-scan   - expected frame width, height and count are known
    flood-fill  - no hints; 4-connected components of content pixels
    manual      - uniform frames from an offset, no pixel inspection
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np
from scipy import ndimage

from ..core.buffer import PixelBuffer
from .border import BorderClassifier
from .cancellation import CancellationToken, check
from .frames import Frame
from .options import DetectionOptions, DetectionMode, EmptyCellPolicy
from .sampler import PixelSampler

logger = logging.getLogger(__name__)


class Strategy(Enum):
    GRID = "grid"
    FLOOD_FILL = "flood_fill"
    MANUAL = "manual"


def uniform_frames(count: int, width: int, height: int,
                   offset_x: int = 0, offset_y: int = 0) -> List[Frame]:
    """A horizontal strip of equally sized frames starting at the offset"""
    return [
        Frame(x=offset_x + i * width, y=offset_y, width=width, height=height)
        for i in range(count)
    ]


def synthesize_manual(options: DetectionOptions) -> List[Frame]:
    """
    Manual frames; identical for any image content.

    Frames are neither clipped to the buffer nor filtered by min_width and
    min_height, so they can run past the sheet edge.
    """
    return uniform_frames(
        options.expected_frame_count,
        options.expected_frame_width,
        options.expected_frame_height,
        options.manual_offset_x,
        options.manual_offset_y,
    )


def content_bounds(mask: np.ndarray) -> Optional[Tuple[int, int, int, int]]:
    """Tight (x, y, w, h) box of True pixels in a mask, None when empty"""
    rows = np.any(mask, axis=1)
    cols = np.any(mask, axis=0)
    if not np.any(rows):
        return None
    y_min, y_max = np.where(rows)[0][[0, -1]]
    x_min, x_max = np.where(cols)[0][[0, -1]]
    return (int(x_min), int(y_min), int(x_max - x_min + 1), int(y_max - y_min + 1))


class FrameDetector:
    """
    Produces an unordered list of frames for one buffer and option set.

    The sampler is only built for the pixel-based strategies, so MANUAL
    mode never touches the image.
    """

    def __init__(self, buffer: PixelBuffer, options: DetectionOptions,
                 token: Optional[CancellationToken] = None):
        self.buffer = buffer
        self.options = options
        self.token = token
        self._sampler = None

    @property
    def strategy(self) -> Strategy:
        if self.options.mode is DetectionMode.MANUAL:
            return Strategy.MANUAL
        if self.options.uses_grid:
            return Strategy.GRID
        return Strategy.FLOOD_FILL

    @property
    def sampler(self) -> PixelSampler:
        if self._sampler is None:
            self._sampler = PixelSampler.from_options(self.buffer, self.options)
        return self._sampler

    def detect(self) -> List[Frame]:
        strategy = self.strategy
        logger.debug("Detecting frames with %s strategy (%s mode)",
                     strategy.value, self.options.mode.value)
        if strategy is Strategy.MANUAL:
            return synthesize_manual(self.options)
        if strategy is Strategy.GRID:
            return self.grid_scan()
        return self.flood_fill()

    def _accepts(self, width: int, height: int) -> bool:
        return width >= self.options.min_width and height >= self.options.min_height

    # ------------------------------------------------------------------
    # Grid-scan
    # ------------------------------------------------------------------

    def grid_scan(self) -> List[Frame]:
        """
        Scan every cell of the sheet-wide grid.

        Cells are cut across the whole sheet, not from a sub-region, since
        sprites can sit anywhere. All accepted cells are returned; trimming
        to the expected count happens after ordering.
        """
        opts = self.options
        fw, fh = opts.expected_frame_width, opts.expected_frame_height
        total_cols = self.buffer.width // fw
        total_rows = self.buffer.height // fh

        classifier = None
        if opts.mode is DetectionMode.BLACK_BORDER:
            classifier = BorderClassifier(self.sampler)

        mask = self.sampler.content_mask
        frames = []
        skipped = 0

        for row in range(total_rows):
            for col in range(total_cols):
                check(self.token)
                cell_x, cell_y = col * fw, row * fh

                if classifier is not None and not classifier.has_black_border(cell_x, cell_y, fw, fh):
                    skipped += 1
                    continue

                frame = self._trim_cell(mask, cell_x, cell_y, fw, fh)
                if frame is not None:
                    frames.append(frame)

        logger.debug(
            "Grid-scan: %dx%d cells of %dx%d, %d accepted, %d without border",
            total_cols, total_rows, fw, fh, len(frames), skipped
        )
        return frames

    def _trim_cell(self, mask: np.ndarray, x: int, y: int, w: int, h: int) -> Optional[Frame]:
        bounds = content_bounds(mask[y:y + h, x:x + w])

        if bounds is None:
            if self.options.empty_cell_policy is EmptyCellPolicy.FULL_CELL and self._accepts(w, h):
                return Frame(x, y, w, h)
            return None

        bx, by, bw, bh = bounds
        if not self._accepts(bw, bh):
            return None
        return Frame(x + bx, y + by, bw, bh)

    # ------------------------------------------------------------------
    # Flood-fill
    # ------------------------------------------------------------------

    def flood_fill(self) -> List[Frame]:
        """Bounding boxes of 4-connected content components"""
        check(self.token)
        # Default structuring element is the 4-connected cross
        labels, components = ndimage.label(self.sampler.content_mask)
        check(self.token)

        frames = []
        for region in ndimage.find_objects(labels):
            if region is None:
                continue
            rows, cols = region
            bw, bh = cols.stop - cols.start, rows.stop - rows.start
            if self._accepts(bw, bh):
                frames.append(Frame(int(cols.start), int(rows.start), int(bw), int(bh)))

        logger.debug("Flood-fill: %d components, %d kept", components, len(frames))
        return frames
