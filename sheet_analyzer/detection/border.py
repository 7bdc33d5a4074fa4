"""
Border Classifier - Checks whether a grid cell is boxed in by black separators
"""

from typing import Iterator, Tuple

from .sampler import PixelSampler


class BorderClassifier:
    """
    Samples the four edges of a cell for black-border sheets.

    Each edge gets SAMPLES_PER_EDGE evenly spaced probes. An edge is black
    when at least EDGE_BLACK_RATIO of its probes are black, and a cell
    passes when MIN_BLACK_EDGES of its edges are black. One missing or
    antialiased edge is tolerated.
    """

    SAMPLES_PER_EDGE = 8
    EDGE_BLACK_RATIO = 0.6
    MIN_BLACK_EDGES = 3

    def __init__(self, sampler: PixelSampler):
        self.sampler = sampler

    @classmethod
    def _positions(cls, start: int, length: int) -> Iterator[int]:
        steps = cls.SAMPLES_PER_EDGE - 1
        for i in range(cls.SAMPLES_PER_EDGE):
            yield start + (i * (length - 1)) // steps

    def _edges(self, x: int, y: int, w: int, h: int) -> Iterator[Iterator[Tuple[int, int]]]:
        right = x + w - 1
        bottom = y + h - 1
        yield ((px, y) for px in self._positions(x, w))        # top
        yield ((px, bottom) for px in self._positions(x, w))   # bottom
        yield ((x, py) for py in self._positions(y, h))        # left
        yield ((right, py) for py in self._positions(y, h))    # right

    def edge_is_black(self, points) -> bool:
        black = sum(1 for px, py in points if self.sampler.is_black(px, py))
        return black / self.SAMPLES_PER_EDGE >= self.EDGE_BLACK_RATIO

    def black_edge_count(self, x: int, y: int, w: int, h: int) -> int:
        """Number of edges of the cell classified as black (0-4)"""
        return sum(1 for edge in self._edges(x, y, w, h) if self.edge_is_black(edge))

    def has_black_border(self, x: int, y: int, w: int, h: int) -> bool:
        return self.black_edge_count(x, y, w, h) >= self.MIN_BLACK_EDGES
