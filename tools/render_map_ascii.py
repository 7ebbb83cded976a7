#!/usr/bin/env python3
"""
Render a generated map as ASCII for debugging.

Instead of glyphs, every occupied cell shows its raw value as a base 36
digit ('+' once it no longer fits), which makes the pipe tiers and the
height levels readable.

Usage:
    python tools/render_map_ascii.py pipes [--width N] [--height N] [--seed S]
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path so we can import mapgen
sys.path.insert(0, str(Path(__file__).parent.parent))

from mapgen.connectivity import count_components, find_dead_ends
from mapgen.grid import Grid
from mapgen.point import Point
from mapgen.registry import get_generator, list_generators
from mapgen.render import render_text

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def render_value_cell(grid: Grid, point: Point) -> str:
    value = grid[point]
    if value == 0:
        return " "
    if value < len(DIGITS):
        return DIGITS[value]
    return "+"


def main():
    parser = argparse.ArgumentParser(description="Render a map as ASCII cell values")
    parser.add_argument("generator", choices=list_generators())
    parser.add_argument("--width", type=int, default=60, help="Map width")
    parser.add_argument("--height", type=int, default=20, help="Map height")
    parser.add_argument("--seed", type=int, default=1, help="Random seed for reproducible generation")
    args = parser.parse_args()

    generator = get_generator(args.generator)
    grid = generator.generate(args.width, args.height, args.seed, generator.properties_type())

    print(render_text(grid, render_value_cell))
    print()
    print(generator.render_text(grid))

    # Print some debug info
    print(f"\n--- Debug Info ---")
    print(f"Map size: {grid.width}x{grid.height} cells")
    print(f"Values: {grid.min()}..{grid.max()}")
    print(f"Connected components: {count_components(grid)}")
    print(f"Dead ends: {len(find_dead_ends(grid))}")


if __name__ == "__main__":
    main()
