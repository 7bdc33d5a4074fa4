#!/usr/bin/env python
"""
Sheet Analyzer CLI - Detect the frames of a sprite sheet

Usage:
    python main.py <sheet_image> [options]
    python main.py --list-presets
"""

import sys

from sheet_analyzer.cli import main


if __name__ == '__main__':
    sys.exit(main())
