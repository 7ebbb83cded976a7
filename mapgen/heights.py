"""
Height map generation.

Elevation is built by stacking many small random rectangles: each one raises
every cell it covers by one. Rectangles of at least 3x3 leave their corners
out, which softens the square look of the result. A cell's final value is the
number of rectangles that covered it.
"""

import colorsys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .grid import Grid, new_grid
from .point import Point
from .rectangle import Rectangle
from .render import Colour, RenderedTextCell
from .rng import make_rng


@dataclass(frozen=True)
class HeightProperties:
    """Settings for a height map."""

    # Number of rectangles to stack
    iterations: int = 1000

    def __post_init__(self) -> None:
        if self.iterations < 0:
            raise ValueError("Iterations cannot be negative")


class HeightRenderStyle(Enum):
    SIMPLE = "simple"
    HEATMAP = "heatmap"
    TERRAIN = "terrain"


def _is_corner(rect: Rectangle, point: Point) -> bool:
    return (point.x == rect.left or point.x == rect.right) and (
        point.y == rect.top or point.y == rect.bottom
    )


def generate_heights(
    width: int,
    height: int,
    seed: int,
    properties: Optional[HeightProperties] = None,
    rng: Optional[np.random.Generator] = None,
) -> Grid:
    """
    Generate a height map.

    Rectangles are at most a fifth of the grid in each direction. Cells
    saturate at the uint16 maximum, so the maximum height never exceeds the
    number of iterations.
    """
    properties = properties if properties is not None else HeightProperties()
    rng = rng if rng is not None else make_rng(seed)
    grid = new_grid(width, height, dtype=np.uint16)
    bounds = grid.rectangle()

    for _ in range(properties.iterations):
        rect = Rectangle.random(
            rng,
            bounds,
            minwidth=1,
            maxwidth=max(1, width // 5),
            minheight=1,
            maxheight=max(1, height // 5),
        )
        round_corners = rect.width >= 3 and rect.height >= 3
        for point in rect.iter():
            if round_corners and _is_corner(rect, point):
                continue
            grid.inc(point)

    return grid


# Terrain bands: (upper bound as a fraction of the height range, colour)
TERRAIN_BANDS: List[Tuple[float, Colour]] = [
    (0.20, (20, 60, 140)),  # deep water
    (0.35, (40, 100, 180)),  # shallow water
    (0.42, (221, 210, 160)),  # beach
    (0.65, (90, 150, 70)),  # grass
    (0.80, (50, 110, 55)),  # forest
    (0.92, (130, 110, 95)),  # rock
    (1.00, (235, 235, 240)),  # snow
]


def _fraction(value: int, low: int, high: int) -> float:
    """Position of value within [low, high]; a flat field sits at 0."""
    if high <= low:
        return 0.0
    return min(1.0, max(0.0, (value - low) / (high - low)))


def height_colour(value: int, low: int, high: int, style: HeightRenderStyle) -> Colour:
    """The RGB colour of a height, relative to the map's lowest and highest cell."""
    fraction = _fraction(value, low, high)
    if style == HeightRenderStyle.SIMPLE:
        # Integer scaling, so exact thirds and the like are not rounded down
        grey = 0 if high <= low else (min(max(value, low), high) - low) * 255 // (high - low)
        return (grey, grey, grey)
    if style == HeightRenderStyle.HEATMAP:
        # Blue for the lowest cells through green and yellow to red for the highest
        hue = (1.0 - fraction) * 240.0 / 360.0
        r, g, b = colorsys.hsv_to_rgb(hue, 1.0, 1.0)
        return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))
    for bound, colour in TERRAIN_BANDS:
        if fraction <= bound:
            return colour
    return TERRAIN_BANDS[-1][1]


def render_height_cell(
    grid: Grid, point: Point, low: int, high: int, style: HeightRenderStyle
) -> RenderedTextCell:
    return RenderedTextCell(background=height_colour(grid[point], low, high, style))


def render_heights(
    grid: Grid, style: HeightRenderStyle = HeightRenderStyle.SIMPLE
) -> Grid:
    """Turn a height map into a grid of coloured cells."""
    low = grid.min()
    high = grid.max()
    return grid.map_into(
        lambda point, _value: render_height_cell(grid, point, low, high, style)
    )
