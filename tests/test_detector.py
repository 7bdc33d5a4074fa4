"""Tests for the three frame detection strategies."""

import pytest

from sheet_analyzer.detection.cancellation import CancellationToken
from sheet_analyzer.detection.detector import (
    FrameDetector, Strategy, content_bounds, synthesize_manual, uniform_frames,
)
from sheet_analyzer.detection.frames import Frame
from sheet_analyzer.detection.options import DetectionMode, DetectionOptions, EmptyCellPolicy
from sheet_analyzer.errors import AnalysisCancelled

from conftest import blank, fill, make_buffer


def grid_options(fw, fh, count, **kwargs) -> DetectionOptions:
    return DetectionOptions(
        expected_frame_width=fw,
        expected_frame_height=fh,
        expected_frame_count=count,
        **kwargs
    )


class TestStrategySelection:
    """The option set picks the strategy."""

    def test_no_hints_is_flood_fill(self, transparent_sheet):
        assert FrameDetector(transparent_sheet, DetectionOptions()).strategy is Strategy.FLOOD_FILL

    def test_partial_hints_is_flood_fill(self, transparent_sheet):
        opts = DetectionOptions(expected_frame_width=16, expected_frame_height=16)
        assert FrameDetector(transparent_sheet, opts).strategy is Strategy.FLOOD_FILL

    def test_all_hints_is_grid(self, transparent_sheet):
        assert FrameDetector(transparent_sheet, grid_options(16, 16, 4)).strategy is Strategy.GRID

    def test_manual_mode_wins(self, transparent_sheet):
        opts = grid_options(16, 16, 4, mode=DetectionMode.MANUAL)
        assert FrameDetector(transparent_sheet, opts).strategy is Strategy.MANUAL


class TestFloodFill:
    """Tests for connected-component detection."""

    def test_single_rectangle(self, single_sprite_sheet):
        frames = FrameDetector(single_sprite_sheet, DetectionOptions()).flood_fill()
        assert frames == [Frame(5, 7, 12, 10)]

    def test_separate_sprites(self, strip_sheet):
        frames = FrameDetector(strip_sheet, DetectionOptions()).flood_fill()
        assert len(frames) == 4
        assert all(f.size.width == 10 and f.size.height == 12 for f in frames)

    def test_diagonal_pixels_are_not_connected(self):
        arr = blank(4, 4)
        arr[0, 0] = (255, 0, 0, 255)
        arr[1, 1] = (255, 0, 0, 255)
        opts = DetectionOptions(min_width=1, min_height=1)
        frames = FrameDetector(make_buffer(arr), opts).flood_fill()
        assert frames == [Frame(0, 0, 1, 1), Frame(1, 1, 1, 1)]

    def test_irregular_shape_bounds(self):
        arr = blank(20, 20)
        fill(arr, 2, 2, 10, 2)   # horizontal bar
        fill(arr, 2, 2, 2, 12)   # vertical bar
        frames = FrameDetector(make_buffer(arr), DetectionOptions()).flood_fill()
        assert frames == [Frame(2, 2, 10, 12)]

    def test_u_shape_is_one_component(self):
        arr = blank(20, 20)
        fill(arr, 0, 0, 2, 10)
        fill(arr, 8, 0, 2, 10)
        fill(arr, 0, 8, 10, 2)
        frames = FrameDetector(make_buffer(arr), DetectionOptions()).flood_fill()
        assert frames == [Frame(0, 0, 10, 10)]

    def test_small_components_are_dropped(self):
        arr = blank(30, 30)
        fill(arr, 0, 0, 7, 20)    # too narrow
        fill(arr, 10, 0, 20, 7)   # too short
        fill(arr, 10, 10, 8, 8)   # exactly minimum
        frames = FrameDetector(make_buffer(arr), DetectionOptions()).flood_fill()
        assert frames == [Frame(10, 10, 8, 8)]

    def test_large_opaque_sheet_is_one_component(self):
        arr = blank(1024, 1024, rgba=(90, 60, 30, 255))
        frames = FrameDetector(make_buffer(arr), DetectionOptions()).flood_fill()
        assert frames == [Frame(0, 0, 1024, 1024)]

    def test_component_count_matches_sprites(self):
        arr = blank(200, 40)
        for i in range(10):
            fill(arr, i * 20 + 1, 1 + i, 12, 12)
        frames = FrameDetector(make_buffer(arr), DetectionOptions()).flood_fill()
        assert sorted(f.x for f in frames) == [i * 20 + 1 for i in range(10)]
        assert all((f.width, f.height) == (12, 12) for f in frames)

    def test_transparent_sheet_has_no_frames(self, transparent_sheet):
        assert FrameDetector(transparent_sheet, DetectionOptions()).flood_fill() == []

    def test_cancelled_token_aborts(self, single_sprite_sheet):
        token = CancellationToken()
        token.cancel()
        detector = FrameDetector(single_sprite_sheet, DetectionOptions(), token)
        with pytest.raises(AnalysisCancelled):
            detector.flood_fill()


class TestGridScan:
    """Tests for grid-scan detection."""

    def test_fully_opaque_grid(self):
        arr = blank(3 * 16, 2 * 12, rgba=(10, 200, 10, 255))
        frames = FrameDetector(make_buffer(arr), grid_options(16, 12, 6)).grid_scan()
        assert frames == [
            Frame(col * 16, row * 12, 16, 12)
            for row in range(2) for col in range(3)
        ]

    def test_cells_are_trimmed(self, half_empty_grid_sheet):
        opts = grid_options(32, 32, 4, empty_cell_policy=EmptyCellPolicy.DROP)
        frames = FrameDetector(half_empty_grid_sheet, opts).grid_scan()
        assert frames == [Frame(6, 6, 20, 20), Frame(70, 6, 20, 20)]

    def test_empty_cells_become_full_cells(self, half_empty_grid_sheet):
        opts = grid_options(32, 32, 4, empty_cell_policy=EmptyCellPolicy.FULL_CELL)
        frames = FrameDetector(half_empty_grid_sheet, opts).grid_scan()
        assert frames == [
            Frame(6, 6, 20, 20),
            Frame(32, 0, 32, 32),
            Frame(70, 6, 20, 20),
            Frame(96, 0, 32, 32),
        ]

    def test_scans_the_whole_sheet(self):
        # Expected count is 1, but the only sprite sits in the last cell
        arr = fill(blank(64, 64), 40, 40, 10, 10)
        opts = grid_options(32, 32, 1, empty_cell_policy=EmptyCellPolicy.DROP)
        frames = FrameDetector(make_buffer(arr), opts).grid_scan()
        assert frames == [Frame(40, 40, 10, 10)]

    def test_partial_cells_are_ignored(self):
        arr = blank(40, 20, rgba=(255, 255, 255, 255))
        frames = FrameDetector(make_buffer(arr), grid_options(16, 16, 2)).grid_scan()
        assert frames == [Frame(0, 0, 16, 16), Frame(16, 0, 16, 16)]

    def test_small_content_is_dropped_not_replaced(self):
        arr = fill(blank(32, 32), 10, 10, 4, 4)
        frames = FrameDetector(make_buffer(arr), grid_options(32, 32, 1)).grid_scan()
        assert frames == []

    def test_full_cell_respects_min_size(self):
        opts = grid_options(4, 4, 4)
        frames = FrameDetector(make_buffer(blank(16, 4)), opts).grid_scan()
        assert frames == []

    def test_black_border_excludes_unbordered_cells(self, black_border_sheet):
        opts = grid_options(32, 32, 3, mode=DetectionMode.BLACK_BORDER)
        frames = FrameDetector(black_border_sheet, opts).grid_scan()
        assert frames == [Frame(10, 6, 12, 12), Frame(72, 6, 16, 20)]

    def test_black_border_cell_without_sprite_is_full_cell(self):
        arr = blank(32, 32, rgba=(0, 0, 0, 255))
        opts = grid_options(32, 32, 1, mode=DetectionMode.BLACK_BORDER)
        frames = FrameDetector(make_buffer(arr), opts).grid_scan()
        assert frames == [Frame(0, 0, 32, 32)]

    def test_cancelled_token_aborts(self, half_empty_grid_sheet):
        token = CancellationToken()
        token.cancel()
        detector = FrameDetector(half_empty_grid_sheet, grid_options(32, 32, 4), token)
        with pytest.raises(AnalysisCancelled):
            detector.grid_scan()


class TestManualSynthesis:
    """Tests for manual frames."""

    def test_uniform_strip(self):
        frames = uniform_frames(3, 10, 12, offset_x=5, offset_y=2)
        assert frames == [Frame(5, 2, 10, 12), Frame(15, 2, 10, 12), Frame(25, 2, 10, 12)]

    def test_manual_uses_offset(self):
        opts = grid_options(16, 20, 2, mode=DetectionMode.MANUAL,
                           manual_offset_x=4, manual_offset_y=8)
        assert synthesize_manual(opts) == [Frame(4, 8, 16, 20), Frame(20, 8, 16, 20)]

    def test_frames_past_the_sheet_are_kept(self, transparent_sheet):
        opts = grid_options(16, 4, 3, mode=DetectionMode.MANUAL, manual_offset_x=40,
                            min_width=8, min_height=8)
        frames = FrameDetector(transparent_sheet, opts).detect()
        assert frames == [Frame(40, 0, 16, 4), Frame(56, 0, 16, 4), Frame(72, 0, 16, 4)]
        assert frames[-1].right > transparent_sheet.width

    def test_manual_never_builds_sampler(self, transparent_sheet):
        opts = grid_options(16, 16, 2, mode=DetectionMode.MANUAL)
        detector = FrameDetector(transparent_sheet, opts)
        assert len(detector.detect()) == 2
        assert detector._sampler is None


class TestContentBounds:
    """Tests for the tight bounding box helper."""

    def test_empty_mask(self):
        import numpy as np
        assert content_bounds(np.zeros((4, 4), dtype=bool)) is None

    def test_single_pixel(self):
        import numpy as np
        mask = np.zeros((4, 5), dtype=bool)
        mask[2, 3] = True
        assert content_bounds(mask) == (3, 2, 1, 1)
