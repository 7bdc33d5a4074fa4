"""
Frame Exporter - Writes detected frames and analysis metadata to disk
"""

from PIL import Image, ImageDraw
import json
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .buffer import PixelBuffer
from .metadata import SpriteSheetMetadata
from ..detection.frames import AnalysisResult, Frame


class FrameExporter:
    """Exports frames cut from a sheet"""

    @classmethod
    def crop(cls, buffer: PixelBuffer, frame: Frame) -> Image.Image:
        """
        Cut a frame out of the sheet.

        Parts of a frame outside the sheet (manual frames are not clipped)
        come out transparent.
        """
        out = Image.new('RGBA', (frame.width, frame.height), (0, 0, 0, 0))

        x0, y0 = min(frame.x, buffer.width), min(frame.y, buffer.height)
        x1, y1 = min(frame.right, buffer.width), min(frame.bottom, buffer.height)
        if x1 > x0 and y1 > y0:
            region = Image.fromarray(buffer.pixels[y0:y1, x0:x1].copy())
            out.paste(region, (0, 0))
        return out

    @classmethod
    def to_frames(
        cls,
        buffer: PixelBuffer,
        frames: Sequence[Frame],
        directory: str | Path,
        prefix: str = "frame"
    ) -> List[Path]:
        """Export each frame as an individual PNG"""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        paths = []
        for i, frame in enumerate(frames):
            frame_path = directory / f"{prefix}_{i:04d}.png"
            cls.crop(buffer, frame).save(frame_path, 'PNG')
            paths.append(frame_path)

        return paths

    @classmethod
    def to_metadata(
        cls,
        result: AnalysisResult,
        path: str | Path,
        metadata: Optional[SpriteSheetMetadata] = None
    ) -> Path:
        """Write the analysis (and optional sheet metadata) as JSON"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = result.to_dict()
        if metadata is not None:
            data['sheet'] = metadata.to_dict()

        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

        return path

    @classmethod
    def to_overlay(
        cls,
        buffer: PixelBuffer,
        frames: Sequence[Frame],
        path: str | Path,
        color: Tuple[int, int, int, int] = (255, 0, 0, 255)
    ) -> Path:
        """Save the sheet with an outline drawn around every frame"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        img = Image.fromarray(buffer.pixels.copy())
        draw = ImageDraw.Draw(img)
        for frame in frames:
            draw.rectangle(
                [frame.x, frame.y, frame.right - 1, frame.bottom - 1],
                outline=color
            )
        img.save(path, 'PNG')

        return path
