"""
Pixel Sampler - Decides which pixels count as sprite content
"""

import numpy as np

from ..core.buffer import PixelBuffer
from .options import DetectionMode, DEFAULT_ALPHA_THRESHOLD, DEFAULT_BLACK_THRESHOLD


class PixelSampler:
    """
    Read-only content test over a pixel buffer.

    ALPHA: a pixel is content when its alpha is above the threshold.
    BLACK_BORDER: it must also be non-black, where black means r, g and b
    are all below the black threshold. Sheets in this style put sprites on
    a black background with black separators, so dark-but-not-black detail
    inside a sprite still counts.
    """

    def __init__(
        self,
        buffer: PixelBuffer,
        mode: DetectionMode = DetectionMode.ALPHA,
        alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
        black_threshold: int = DEFAULT_BLACK_THRESHOLD,
    ):
        if mode is DetectionMode.MANUAL:
            raise RuntimeError("Manual mode does not inspect pixels")
        self.buffer = buffer
        self.mode = mode
        self.alpha_threshold = alpha_threshold
        self.black_threshold = black_threshold
        self._content_mask = None
        self._black_mask = None

    @classmethod
    def from_options(cls, buffer: PixelBuffer, options) -> 'PixelSampler':
        return cls(
            buffer,
            mode=options.mode,
            alpha_threshold=options.alpha_threshold,
            black_threshold=options.black_threshold,
        )

    @property
    def width(self) -> int:
        return self.buffer.width

    @property
    def height(self) -> int:
        return self.buffer.height

    @property
    def black_mask(self) -> np.ndarray:
        """HxW bool mask of black pixels (alpha ignored)"""
        if self._black_mask is None:
            self._black_mask = np.all(self.buffer.rgb < self.black_threshold, axis=2)
        return self._black_mask

    @property
    def content_mask(self) -> np.ndarray:
        """HxW bool mask of content pixels under the active mode"""
        if self._content_mask is None:
            mask = self.buffer.alpha > self.alpha_threshold
            if self.mode is DetectionMode.BLACK_BORDER:
                mask = mask & ~self.black_mask
            mask.setflags(write=False)
            self._content_mask = mask
        return self._content_mask

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_content(self, x: int, y: int) -> bool:
        """Content test; out-of-range coordinates are never content"""
        if not self.in_bounds(x, y):
            return False
        return bool(self.content_mask[y, x])

    def is_black(self, x: int, y: int) -> bool:
        """Black test used by border sampling; out-of-range is not black"""
        if not self.in_bounds(x, y):
            return False
        return bool(self.black_mask[y, x])
