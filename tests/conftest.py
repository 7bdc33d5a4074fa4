"""Shared pytest fixtures for sheet analyzer tests."""

import numpy as np
import pytest

from sheet_analyzer.core.buffer import PixelBuffer


# =============================================================================
# Buffer helpers
# =============================================================================


def blank(width: int, height: int, rgba=(0, 0, 0, 0)) -> np.ndarray:
    """HxWx4 array filled with one colour."""
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[:, :] = rgba
    return arr


def fill(arr: np.ndarray, x: int, y: int, w: int, h: int, rgba=(255, 0, 0, 255)) -> np.ndarray:
    """Paint a rectangle in place and return the array."""
    arr[y:y + h, x:x + w] = rgba
    return arr


def outline(arr: np.ndarray, x: int, y: int, w: int, h: int, rgba=(0, 0, 0, 255)) -> np.ndarray:
    """Paint a 1px rectangle outline in place."""
    arr[y, x:x + w] = rgba
    arr[y + h - 1, x:x + w] = rgba
    arr[y:y + h, x] = rgba
    arr[y:y + h, x + w - 1] = rgba
    return arr


def make_buffer(arr: np.ndarray) -> PixelBuffer:
    return PixelBuffer.from_array(arr)


# =============================================================================
# Sheet Fixtures
# =============================================================================


@pytest.fixture
def transparent_sheet() -> PixelBuffer:
    """64x64 fully transparent sheet."""
    return make_buffer(blank(64, 64))


@pytest.fixture
def single_sprite_sheet() -> PixelBuffer:
    """One opaque 12x10 rectangle at (5, 7) on a 40x30 transparent canvas."""
    return make_buffer(fill(blank(40, 30), 5, 7, 12, 10))


@pytest.fixture
def strip_sheet() -> PixelBuffer:
    """Four separated 10x12 sprites in one row, 16px apart."""
    arr = blank(64, 16)
    for i in range(4):
        fill(arr, i * 16 + 2, 2, 10, 12)
    return make_buffer(arr)


@pytest.fixture
def half_empty_grid_sheet() -> PixelBuffer:
    """128x32 sheet: cells 0 and 2 hold a centred 20x20 square, 1 and 3 are empty."""
    arr = blank(128, 32)
    fill(arr, 6, 6, 20, 20)
    fill(arr, 64 + 6, 6, 20, 20)
    return make_buffer(arr)


@pytest.fixture
def black_border_sheet() -> PixelBuffer:
    """
    96x32 black sheet with three 32x32 cells.

    Cell 0 has a full black border and a grey 12x12 sprite; cell 1 has an
    opaque white interior reaching its edges (no border); cell 2 has a
    border and a dark-red sprite.
    """
    arr = blank(96, 32, rgba=(0, 0, 0, 255))
    fill(arr, 10, 6, 12, 12, rgba=(128, 128, 128, 255))
    fill(arr, 32, 0, 32, 32, rgba=(255, 255, 255, 255))
    fill(arr, 64 + 8, 6, 16, 20, rgba=(60, 0, 0, 255))
    return make_buffer(arr)
