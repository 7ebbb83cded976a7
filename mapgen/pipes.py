"""
Pipe Network Generation
=======================

The network grows outward from a backbone:

1. Scatter the backbone seeds (value 1) at random.
2. Chain each backbone seed to the nearest seed placed after it with a carved
   path (value 2). This is a greedy nearest-neighbour chain, not a spanning
   tree, so the result depends on placement order.
3. For every tier of regular seeds, drop seeds on empty cells (value 3 for the
   first tier, 4 for the second, ...) and carve a path (tier value + 1) from
   each one to the nearest cell that belongs to an earlier tier or the
   backbone.
4. Optionally, connect every dead end to its nearest fellow dead end
   (value 99) so the network has fewer loose ends.

Cell values therefore double as a depth: anything <= 2 is backbone.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

import numpy as np

from .connectivity import find_dead_ends
from .grid import Grid, new_grid
from .log import debug
from .point import Point
from .render import render_text
from .rng import make_rng

EMPTY = 0
BACKBONE_SEED = 1
BACKBONE_PATH = 2
FIRST_TIER = 3
INTERCONNECT = 99


@dataclass(frozen=True)
class PipeProperties:
    """Settings for a pipe network."""

    # Initial backbone points
    backboneseeds: int = 20
    # Regular seeds to place, one entry per tier
    regularseeds: Tuple[int, ...] = (40, 40, 60)
    # Reduce dead ends by joining them up
    interconnect: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "regularseeds", tuple(self.regularseeds))
        if self.backboneseeds < 0 or any(count < 0 for count in self.regularseeds):
            raise ValueError("Seed counts cannot be negative")


def _nearest_cell(
    grid: Grid, point: Point, predicate: Callable[[np.ndarray], np.ndarray]
) -> Optional[Point]:
    """
    The cell closest to point whose value satisfies predicate.

    predicate receives the whole data array and returns a boolean mask. Ties
    go to the first match in row-major order.
    """
    rows, cols = np.nonzero(predicate(grid.data))
    if len(rows) == 0:
        return None
    distances = np.hypot(cols - float(point.x), rows - float(point.y))
    best = int(np.argmin(distances))
    return Point(int(cols[best]), int(rows[best]))


def _place_backbone(grid: Grid, rng: np.random.Generator, count: int) -> List[Point]:
    """Scatter backbone seeds, in placement order. Seeds may coincide."""
    bounds = grid.rectangle()
    seeds: List[Point] = []
    for _ in range(count):
        point = Point.random(rng, bounds)
        grid[point] = BACKBONE_SEED
        seeds.append(point)
    return seeds


def _connect_backbone(grid: Grid, rng: np.random.Generator, seeds: Sequence[Point]) -> None:
    """Chain every backbone seed to its nearest later seed."""
    for i, point in enumerate(seeds):
        closest: Optional[Point] = None
        min_distance: Optional[float] = None
        for other in seeds[i + 1 :]:
            distance = point.distance(other)
            if min_distance is None or distance < min_distance:
                min_distance = distance
                closest = other
        if closest is not None:
            grid.randompathto(rng, point, closest, BACKBONE_PATH)


def _grow_tier(grid: Grid, rng: np.random.Generator, tier: int, count: int) -> int:
    """
    Place count seeds of one tier and hook each into the existing network.

    Returns the number of seeds placed, which is less than count only when
    the grid ran out of empty cells.
    """
    bounds = grid.rectangle()
    placed = 0
    while placed < count:
        if not (grid.data == EMPTY).any():
            debug(f"Tier {tier}: grid is full after {placed} of {count} seeds")
            break
        point = Point.random(rng, bounds)
        if grid[point] != EMPTY:
            continue
        placed += 1
        grid[point] = tier
        closest = _nearest_cell(grid, point, lambda data: (data > EMPTY) & (data < tier))
        if closest is not None:
            grid.randompathto(rng, point, closest, tier + 1)
    return placed


def _interconnect(grid: Grid, rng: np.random.Generator) -> None:
    """Join each dead end to its nearest other dead end."""
    dead_ends = find_dead_ends(grid, minimum=BACKBONE_PATH + 1)
    processed: Set[Point] = set()
    for point in dead_ends:
        if point in processed:
            continue
        closest: Optional[Point] = None
        min_distance: Optional[float] = None
        for other in dead_ends:
            if other == point:
                continue
            distance = point.distance(other)
            if min_distance is None or distance < min_distance:
                min_distance = distance
                closest = other
        if closest is not None:
            grid.randompathto(rng, point, closest, INTERCONNECT)
            processed.add(closest)
    debug(f"Interconnected {len(processed)} of {len(dead_ends)} dead ends")


def generate_pipes(
    width: int,
    height: int,
    seed: int,
    properties: Optional[PipeProperties] = None,
    rng: Optional[np.random.Generator] = None,
) -> Grid:
    """
    Generate a pipe network.

    Parameters:
        width, height: Grid dimensions, both positive
        seed: Seed for the random generator (ignored when rng is given)
        properties: Network settings, defaults to PipeProperties()
        rng: An already seeded generator to draw from instead

    Returns:
        A uint8 grid using the cell values documented at the top of this module
    """
    properties = properties if properties is not None else PipeProperties()
    rng = rng if rng is not None else make_rng(seed)
    grid = new_grid(width, height, dtype=np.uint8)

    backbone = _place_backbone(grid, rng, properties.backboneseeds)
    _connect_backbone(grid, rng, backbone)

    for index, count in enumerate(properties.regularseeds):
        _grow_tier(grid, rng, FIRST_TIER + index, count)

    if properties.interconnect:
        _interconnect(grid, rng)

    return grid


# Glyph for (north, east, south, west, backbone). Backbone cells use heavy lines.
PIPE_GLYPHS: Dict[Tuple[bool, bool, bool, bool, bool], str] = {
    (True, True, True, True, False): "┼",
    (True, True, True, True, True): "╋",
    (True, True, True, False, False): "├",
    (True, True, True, False, True): "┣",
    (False, True, True, True, False): "┬",
    (False, True, True, True, True): "┳",
    (True, False, True, True, False): "┤",
    (True, False, True, True, True): "┫",
    (True, True, False, True, False): "┴",
    (True, True, False, True, True): "┻",
    (True, True, False, False, False): "└",
    (True, True, False, False, True): "┗",
    (True, False, True, False, False): "│",
    (True, False, True, False, True): "┃",
    (True, False, False, True, False): "┘",
    (True, False, False, True, True): "┛",
    (False, True, True, False, False): "┌",
    (False, True, True, False, True): "┏",
    (False, True, False, True, False): "─",
    (False, True, False, True, True): "━",
    (False, False, True, True, False): "┐",
    (False, False, True, True, True): "┓",
    (True, False, False, False, False): "╵",
    (True, False, False, False, True): "╹",
    (False, True, False, False, False): "╶",
    (False, True, False, False, True): "╺",
    (False, False, True, False, False): "╷",
    (False, False, True, False, True): "╻",
    (False, False, False, True, False): "╴",
    (False, False, False, True, True): "╸",
    # An occupied cell without occupied neighbours, e.g. a lone backbone seed
    (False, False, False, False, False): "·",
    (False, False, False, False, True): "•",
}

UNKNOWN_GLYPH = "?"


def pipe_glyph(north: bool, east: bool, south: bool, west: bool, backbone: bool) -> str:
    return PIPE_GLYPHS.get(
        (bool(north), bool(east), bool(south), bool(west), bool(backbone)), UNKNOWN_GLYPH
    )


def render_pipe_cell(grid: Grid, point: Point) -> str:
    """The box drawing glyph for one cell, a space when empty."""
    value = grid[point]
    if value == EMPTY:
        return " "
    north, east, south, west = grid.hasneighbours(point)
    return pipe_glyph(north, east, south, west, value <= BACKBONE_PATH)


def render_pipes(grid: Grid) -> str:
    return render_text(grid, render_pipe_cell)
