"""
Pixel Buffer - Decoded RGBA pixel data for a sprite sheet
Loads PNG, GIF, JPEG, BMP and WebP sheets through Pillow
"""

from PIL import Image, UnidentifiedImageError
import numpy as np
from pathlib import Path
from dataclasses import dataclass
from typing import Tuple

from ..errors import InvalidBuffer


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Read-only RGBA view of a decoded sprite sheet"""
    width: int
    height: int
    pixels: np.ndarray  # HxWx4 uint8, row-major RGBA

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidBuffer(
                f"Buffer dimensions must be positive, got {self.width}x{self.height}",
                width=self.width, height=self.height
            )
        if self.pixels.shape != (self.height, self.width, 4):
            raise InvalidBuffer(
                f"Pixel array shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height} RGBA",
                width=self.width, height=self.height
            )
        self.pixels.setflags(write=False)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[:, :, 3]

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[:, :, :3]

    def rgba_at(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """RGBA tuple of a single pixel (no bounds check)"""
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> 'PixelBuffer':
        """Create a buffer from an HxWx3 or HxWx4 numpy array"""
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise InvalidBuffer("Pixels must be HxWx3 or HxWx4 array")

        height, width = pixels.shape[:2]
        if width == 0 or height == 0:
            raise InvalidBuffer(
                f"Buffer dimensions must be positive, got {width}x{height}",
                width=width, height=height
            )

        # Ensure RGBA
        if pixels.shape[2] == 3:
            alpha = np.full((height, width, 1), 255, dtype=np.uint8)
            pixels = np.concatenate([pixels.astype(np.uint8), alpha], axis=2)

        # Own a private copy so callers cannot mutate it afterwards
        data = np.array(pixels, dtype=np.uint8, copy=True)
        return cls(width=width, height=height, pixels=data)

    @classmethod
    def from_rgba_bytes(cls, width: int, height: int, data: bytes) -> 'PixelBuffer':
        """Create a buffer from raw row-major RGBA bytes (4 bytes per pixel)"""
        if width <= 0 or height <= 0:
            raise InvalidBuffer(
                f"Buffer dimensions must be positive, got {width}x{height}",
                width=width, height=height
            )
        expected = width * height * 4
        if len(data) != expected:
            raise InvalidBuffer(
                f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}",
                width=width, height=height
            )
        pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4).copy()
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def from_image(cls, img: Image.Image) -> 'PixelBuffer':
        """Create a buffer from a Pillow image"""
        if img.mode != 'RGBA':
            img = img.convert('RGBA')
        return cls.from_array(np.array(img))

    @classmethod
    def load(cls, path: str | Path) -> 'PixelBuffer':
        """Decode an image file into a buffer"""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported format: {suffix}")

        try:
            with Image.open(path) as img:
                return cls.from_image(img)
        except (UnidentifiedImageError, OSError) as e:
            raise InvalidBuffer(f"Could not decode image {path}: {e}") from e


SUPPORTED_FORMATS = {'.png', '.gif', '.jpg', '.jpeg', '.bmp', '.webp'}
