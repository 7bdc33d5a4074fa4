"""
Sheet Analyzer CLI - Detect the frames of a sprite sheet

Usage:
    python main.py <sheet_image> [options]

Examples:
    python main.py walk.png                                   # Flood-fill detection
    python main.py walk.png -W 32 -H 32 -n 8                  # Grid-scan with hints
    python main.py boxed.png --mode black-border -W 32 -H 32 -n 4
    python main.py strip.png --mode manual -W 16 -H 20 -n 5 --offset-x 4
    python main.py walk.png --export frames/ --overlay walk_overlay.png
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.buffer import PixelBuffer
from .core.exporter import FrameExporter
from .core.metadata import metadata_from_result
from .core.presets import apply_overrides, get_preset, get_preset_manager
from .detection.analyzer import analyze
from .detection.options import DetectionMode, DetectionOptions, EmptyCellPolicy
from .errors import InvalidBuffer, InvalidOptions, PresetError, SizeExceeded


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detect animation frames on a sprite sheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Detection:
  With --frame-width, --frame-height and --frame-count the whole sheet is
  cut into cells of that size and each cell is trimmed to its content.
  Without them, connected regions of content pixels become frames.
  --mode manual skips pixel inspection and lays out a uniform strip.

Modes:
  alpha         - content is any pixel with alpha above the threshold
  black-border  - content must also be non-black; grid cells need a
                  black border on at least 3 sides
  manual        - uniform frames from --offset-x/--offset-y
        """
    )

    parser.add_argument(
        'input',
        type=str,
        nargs='?',  # Optional for --list-presets
        default=None,
        help='Sprite sheet image (PNG, GIF, etc.)'
    )

    parser.add_argument(
        '-m', '--mode',
        type=str,
        default=None,
        choices=['alpha', 'black-border', 'manual'],
        help='Detection mode (default: alpha)'
    )

    parser.add_argument('-W', '--frame-width', type=int, default=None, help='Expected frame width')
    parser.add_argument('-H', '--frame-height', type=int, default=None, help='Expected frame height')
    parser.add_argument('-n', '--frame-count', type=int, default=None, help='Expected frame count')

    parser.add_argument('--min-width', type=int, default=None, help='Minimum frame width (default: 8)')
    parser.add_argument('--min-height', type=int, default=None, help='Minimum frame height (default: 8)')

    parser.add_argument(
        '--alpha-threshold',
        type=int,
        default=None,
        help='Alpha above this counts as opaque, 0-255 (default: 10)'
    )

    parser.add_argument(
        '--black-threshold',
        type=int,
        default=None,
        help='RGB below this counts as black, 0-255 (default: 15)'
    )

    parser.add_argument('--offset-x', type=int, default=None, help='Manual mode X offset')
    parser.add_argument('--offset-y', type=int, default=None, help='Manual mode Y offset')

    parser.add_argument(
        '--empty-cells',
        type=str,
        default=None,
        choices=['full', 'drop'],
        help='Grid cells without content: keep the full cell or drop it (default: full)'
    )

    parser.add_argument(
        '--max-pixels',
        type=int,
        default=None,
        help='Refuse sheets with more pixels than this'
    )

    parser.add_argument('-p', '--preset', type=str, default=None, help='Start from a detection preset')
    parser.add_argument('--list-presets', action='store_true', help='List available presets and exit')

    parser.add_argument('--export', type=str, default=None, metavar='DIR',
                        help='Write each frame as a PNG into DIR')
    parser.add_argument('--overlay', type=str, default=None, metavar='PATH',
                        help='Write the sheet with frame outlines to PATH')
    parser.add_argument('--json', action='store_true', help='Print the analysis as JSON')

    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    return parser


def options_from_args(args: argparse.Namespace) -> DetectionOptions:
    """Detection options from CLI flags, layered over a preset if given"""
    overrides = {
        'mode': DetectionMode.from_string(args.mode) if args.mode else None,
        'expected_frame_width': args.frame_width,
        'expected_frame_height': args.frame_height,
        'expected_frame_count': args.frame_count,
        'min_width': args.min_width,
        'min_height': args.min_height,
        'alpha_threshold': args.alpha_threshold,
        'black_threshold': args.black_threshold,
        'manual_offset_x': args.offset_x,
        'manual_offset_y': args.offset_y,
        'empty_cell_policy': EmptyCellPolicy.from_string(args.empty_cells) if args.empty_cells else None,
        'max_pixels': args.max_pixels,
    }

    if args.preset:
        return apply_overrides(get_preset(args.preset), **overrides)
    return DetectionOptions(**{k: v for k, v in overrides.items() if v is not None})


def print_presets() -> None:
    manager = get_preset_manager()
    print("Available Detection Presets:\n")
    for name in manager.list_all():
        preset = manager.get(name)
        source = "" if manager.is_builtin(name) else " (user)"
        print(f"  {name:<20} - {preset.description}{source}")
    print(f"\nTotal: {len(manager.list_all())} presets")
    print("Usage: --preset <name>")


def print_summary(path: str, result) -> None:
    print(f"Sheet: {path}")
    print(f"Frames: {result.frame_count}")
    print(f"Layout: {result.layout.value} ({result.rows} rows x {result.columns} columns)")
    size = result.suggested_frame_size
    print(f"Suggested frame size: {size.width}x{size.height}")
    if result.mismatch is not None:
        print(f"Warning: expected {result.mismatch.expected} frames, found {result.mismatch.found}")
    for i, frame in enumerate(result.frames):
        print(f"  [{i:3d}] x={frame.x:<5d} y={frame.y:<5d} {frame.width}x{frame.height}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.list_presets:
        print_presets()
        return 0

    if not args.input:
        print("Error: Input file is required")
        print("Usage: python main.py <sheet_image> [options]")
        return 1

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {args.input}")
        return 1

    try:
        options = options_from_args(args)
        buffer = PixelBuffer.load(input_path)
        result = analyze(buffer, options)
    except (InvalidOptions, PresetError, InvalidBuffer, SizeExceeded) as e:
        print(f"Error: {e.message}")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_summary(args.input, result)

    if args.export:
        paths = FrameExporter.to_frames(buffer, result.frames, args.export, prefix=input_path.stem)
        FrameExporter.to_metadata(
            result,
            Path(args.export) / f"{input_path.stem}.json",
            metadata_from_result(input_path.stem, result)
        )
        if not args.json:
            print(f"Exported {len(paths)} frames to {args.export}")

    if args.overlay:
        FrameExporter.to_overlay(buffer, result.frames, args.overlay)
        if not args.json:
            print(f"Overlay: {args.overlay}")

    return 0
