#!/usr/bin/env python3
"""
Generate a map and print it to the terminal.

Usage:
    python generate_map.py pipes                          # Default pipe network
    python generate_map.py pipes -b 5 -r 10,20 --interconnect
    python generate_map.py heights --style heatmap        # Coloured height map
    python generate_map.py rooms --rooms 8 --seed 42      # Reproducible rooms
    python generate_map.py rooms --output rooms.png       # Save an image instead
    python generate_map.py pipes --loop --delay 0.5       # Live preview
"""

import argparse
import sys
import time
from typing import Any, List, Optional, Tuple

from mapgen.connectivity import count_components
from mapgen.errors import MapGenError
from mapgen.grid import Grid
from mapgen.heights import HeightProperties, HeightRenderStyle
from mapgen.log import debug, log, set_verbose
from mapgen.pipes import PipeProperties
from mapgen.registry import MapGenerator, get_generator, list_generators
from mapgen.render import render_ansi, render_glyph_image, render_image, save_image
from mapgen.rng import random_seed
from mapgen.rooms import RoomProperties

CLEAR_SCREEN = "\033[2J\033[H"


def parse_regularseeds(text: str) -> Tuple[int, ...]:
    """Parse a comma separated list of seed counts, e.g. "40,40,60"."""
    try:
        counts = tuple(int(part) for part in text.split(",") if part.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected comma separated integers, got {text!r}")
    if any(count < 0 for count in counts):
        raise argparse.ArgumentTypeError("Seed counts cannot be negative")
    return counts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Procedural map generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("generator", choices=list_generators(), help="Kind of map to generate")
    parser.add_argument("--width", "-W", type=int, default=80, help="Map width (default: 80)")
    parser.add_argument("--height", "-H", type=int, default=30, help="Map height (default: 30)")
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=0,
        help="Random seed, 0 picks a random one (default: 0)",
    )
    parser.add_argument(
        "--backboneseeds", "-b",
        type=int,
        default=20,
        help="Pipes: number of backbone seeds (default: 20)",
    )
    parser.add_argument(
        "--regularseeds", "-r",
        type=parse_regularseeds,
        default=(40, 40, 60),
        help="Pipes: regular seeds per tier, comma separated (default: 40,40,60)",
    )
    parser.add_argument(
        "--interconnect", "-i",
        action="store_true",
        help="Pipes: join dead ends to each other",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=1000,
        help="Heights: number of stacked rectangles (default: 1000)",
    )
    parser.add_argument("--rooms", type=int, default=10, help="Rooms: number of rooms (default: 10)")
    parser.add_argument(
        "--style",
        choices=[style.value for style in HeightRenderStyle],
        default=HeightRenderStyle.SIMPLE.value,
        help="Heights: colour ramp (default: simple)",
    )
    parser.add_argument(
        "--loop",
        action="store_true",
        help="Keep generating new maps (live preview), stop with Ctrl-C",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=1.0,
        help="Seconds between maps in --loop mode (default: 1.0)",
    )
    parser.add_argument("--output", "-o", type=str, help="Save the map as an image instead of printing it")
    parser.add_argument("--cell-size", type=int, default=12, help="Image pixels per cell (default: 12)")
    parser.add_argument("--stats", action="store_true", help="Print map statistics to stderr")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log generation details")
    return parser


def build_properties(args: argparse.Namespace) -> Any:
    """Properties for the selected generator from the command line options."""
    if args.generator == "pipes":
        return PipeProperties(
            backboneseeds=args.backboneseeds,
            regularseeds=args.regularseeds,
            interconnect=args.interconnect,
        )
    if args.generator == "heights":
        return HeightProperties(iterations=args.iterations)
    return RoomProperties(rooms=args.rooms)


def render_map(generator: MapGenerator, grid: Grid, style: HeightRenderStyle) -> str:
    if generator.render_cells is not None:
        return render_ansi(generator.render_cells(grid, style))
    return generator.render_text(grid)


def save_map(
    generator: MapGenerator, grid: Grid, style: HeightRenderStyle, path: str, cell_size: int
) -> None:
    if generator.render_cells is not None:
        image = render_image(generator.render_cells(grid, style), cell_size=cell_size)
    elif generator.render_cell is not None:
        image = render_glyph_image(grid, generator.render_cell, cell_size=cell_size)
    else:
        raise ValueError(f"The {generator.name} generator cannot render images")
    output_path = save_image(image, path)
    log(f"Saved to: {output_path.absolute()}")


def log_stats(grid: Grid) -> None:
    occupied = int((grid.data > 0).sum())
    log(f"Map size: {grid.width}x{grid.height} cells")
    log(f"Occupied cells: {occupied} of {grid.size}")
    log(f"Values: {grid.min()}..{grid.max()}")
    log(f"Connected components: {count_components(grid)}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    set_verbose(args.verbose)

    generator = get_generator(args.generator)
    style = HeightRenderStyle(args.style)

    try:
        properties = build_properties(args)
        seed = args.seed
        while True:
            if seed == 0:
                seed = random_seed()
                log(f"Using random seed: {seed}")
            debug(f"Generating {args.generator} map {args.width}x{args.height} with {properties}")
            grid = generator.generate(args.width, args.height, seed, properties)

            if args.output:
                save_map(generator, grid, style, args.output, args.cell_size)
            else:
                if args.loop:
                    sys.stdout.write(CLEAR_SCREEN)
                print(render_map(generator, grid, style))
            if args.stats:
                log_stats(grid)

            if not args.loop:
                break
            time.sleep(args.delay)
            seed = 0
    except KeyboardInterrupt:
        log("Stopping...")
    except (ValueError, MapGenError) as e:
        log(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
