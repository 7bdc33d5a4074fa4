"""
Sheet Analyzer - Frame extraction and layout inference for one sprite sheet
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..core.buffer import PixelBuffer
from ..errors import InvalidBuffer, SizeExceeded
from .cancellation import CancellationToken, check
from .detector import FrameDetector, Strategy, uniform_frames
from .frames import AnalysisResult, DetectionMismatch, Frame
from .layout import analyze_layout
from .options import DetectionOptions
from .ordering import order_frames, row_tolerance_for

logger = logging.getLogger(__name__)


def _check_buffer(buffer: PixelBuffer, options: DetectionOptions) -> None:
    if buffer is None or buffer.width <= 0 or buffer.height <= 0:
        width = getattr(buffer, 'width', None)
        height = getattr(buffer, 'height', None)
        raise InvalidBuffer(f"Cannot analyze a {width}x{height} buffer",
                            width=width, height=height)

    if buffer.pixel_count > options.max_pixels:
        raise SizeExceeded(
            f"{buffer.width}x{buffer.height} sheet has {buffer.pixel_count} pixels, "
            f"limit is {options.max_pixels}",
            pixel_count=buffer.pixel_count,
            limit=options.max_pixels,
        )


def analyze(
    buffer: PixelBuffer,
    options: Optional[DetectionOptions] = None,
    token: Optional[CancellationToken] = None,
) -> AnalysisResult:
    """
    Detect, order and classify the frames of a sprite sheet.

    Args:
        buffer: Decoded sheet pixels
        options: Detection settings (flood-fill in alpha mode by default)
        token: Optional token; cancelling it aborts the scan

    Returns:
        AnalysisResult. A grid-scan that accepts a different number of
        cells than expected still returns its best effort and records the
        difference in ``mismatch``.

    Raises:
        InvalidBuffer: Buffer has no pixels
        SizeExceeded: Buffer is larger than ``options.max_pixels``
        AnalysisCancelled: The token was cancelled mid-scan
    """
    options = options or DetectionOptions()
    _check_buffer(buffer, options)
    check(token)

    detector = FrameDetector(buffer, options, token)
    strategy = detector.strategy
    tolerance = row_tolerance_for(options)

    frames = order_frames(detector.detect(), tolerance)
    mismatch = None

    if strategy is Strategy.GRID:
        expected = options.expected_frame_count
        if len(frames) != expected:
            mismatch = DetectionMismatch(expected=expected, found=len(frames))
            logger.warning(
                "Grid-scan accepted %d cells but %d frames were expected",
                len(frames), expected
            )
        frames = frames[:expected]

    check(token)
    suggested, layout, rows, columns = analyze_layout(frames, tolerance)

    if not frames:
        logger.info("No content found on %dx%d sheet", buffer.width, buffer.height)

    result = AnalysisResult(
        frames=tuple(frames),
        suggested_frame_size=suggested,
        layout=layout,
        rows=rows,
        columns=columns,
        mismatch=mismatch,
    )

    logger.info(
        "Sprite sheet analysis: %d frames, %s layout (%dx%d), suggested size %dx%d",
        result.frame_count, layout.value, rows, columns,
        suggested.width, suggested.height
    )
    return result


def analyze_file(path: str | Path, options: Optional[DetectionOptions] = None,
                 token: Optional[CancellationToken] = None) -> AnalysisResult:
    """Decode an image file and analyze it"""
    return analyze(PixelBuffer.load(path), options, token)


def frames_or_fallback(result: AnalysisResult, options: DetectionOptions) -> List[Frame]:
    """
    Detected frames when they match the expected count, else a uniform strip.

    Sprites drawn without transparent gaps merge into fewer components, so
    callers with known frame dimensions fall back to frames cut from the
    manual offset.
    """
    if not options.uses_grid or result.frame_count == options.expected_frame_count:
        return list(result.frames)

    logger.warning(
        "Detected %d frames but expected %d, using uniform fallback frames",
        result.frame_count, options.expected_frame_count
    )
    return uniform_frames(
        options.expected_frame_count,
        options.expected_frame_width,
        options.expected_frame_height,
        options.manual_offset_x,
        options.manual_offset_y,
    )
