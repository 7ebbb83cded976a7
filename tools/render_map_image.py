#!/usr/bin/env python3
"""
Render a map to an image file for visual inspection.

Useful for:
- Looking at maps too large for the terminal
- Comparing height map colour styles
- Debugging corridor placement in room layouts

Usage:
    python tools/render_map_image.py rooms                     # Default settings, seed 1
    python tools/render_map_image.py heights --style terrain   # Terrain colours
    python tools/render_map_image.py pipes --seed 42           # Reproducible map
    python tools/render_map_image.py rooms --output my.png     # Custom output path
"""

import argparse
import cv2
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from mapgen.heights import HeightRenderStyle
from mapgen.registry import get_generator, list_generators
from mapgen.render import render_glyph_image, render_image, save_image
from mapgen.rooms import generate_room_layout


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Render a map to an image file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("generator", choices=list_generators())
    parser.add_argument("--width", type=int, default=80, help="Map width (default: 80)")
    parser.add_argument("--height", type=int, default=30, help="Map height (default: 30)")
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=1,
        help="Random seed (default: 1)",
    )
    parser.add_argument(
        "--style",
        choices=[style.value for style in HeightRenderStyle],
        default=HeightRenderStyle.HEATMAP.value,
        help="Height map colours (default: heatmap)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=16,
        help="Pixels per cell (default: 16)",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default="map_render.png",
        help="Output image path (default: map_render.png)",
    )
    parser.add_argument(
        "--show-grid",
        action="store_true",
        help="Overlay the cell grid on the image",
    )

    args = parser.parse_args()

    generator = get_generator(args.generator)
    print(f"Generating {args.generator} map {args.width}x{args.height} with seed {args.seed}...")
    grid = generator.generate(args.width, args.height, args.seed, generator.properties_type())

    if generator.render_cells is not None:
        image = render_image(
            generator.render_cells(grid, HeightRenderStyle(args.style)), cell_size=args.cell_size
        )
    else:
        image = render_glyph_image(grid, generator.render_cell, cell_size=args.cell_size)

    height_pixels, width_pixels = image.shape[:2]

    # Optionally overlay a grid
    if args.show_grid:
        print("Adding cell grid overlay...")
        for col in range(grid.width + 1):
            x = col * args.cell_size
            cv2.line(image, (x, 0), (x, height_pixels), (64, 64, 64), 1)
        for row in range(grid.height + 1):
            y = row * args.cell_size
            cv2.line(image, (0, y), (width_pixels, y), (64, 64, 64), 1)

    # Outline rooms so corridors stand out
    if args.generator == "rooms":
        _, rooms = generate_room_layout(args.width, args.height, args.seed)
        for room in rooms:
            top_left = (room.left * args.cell_size, room.top * args.cell_size)
            bottom_right = ((room.right + 1) * args.cell_size - 1, (room.bottom + 1) * args.cell_size - 1)
            cv2.rectangle(image, top_left, bottom_right, (0, 0, 255), 1)
        print(f"Rooms placed: {len(rooms)}")

    output_path = save_image(image, args.output)
    print(f"Saved to: {output_path.absolute()}")


if __name__ == "__main__":
    main()
