"""
Room Layout Generation
======================

Rooms are placed by rejection sampling and joined as they are placed:

1. Draw a random room (3 cells up to a quarter of the map in each direction).
2. If it intersects an accepted room, throw it away. After 100 rejections in
   a row, stop with however many rooms were placed.
3. Otherwise mark its cells and join it to the nearest earlier room
   (corner distance):
   a. a straight horizontal corridor if the rooms share a row,
   b. else a straight vertical corridor if they share a column,
   c. else a random walk between a point in each room.

Since every room is joined to one placed before it, all rooms end up
connected.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .grid import Grid, new_grid
from .log import debug
from .point import Point
from .rectangle import Rectangle
from .render import render_text
from .rng import make_rng

EMPTY = 0
OCCUPIED = 1

MIN_ROOM_SIZE = 3
MAX_ROOM_REJECTIONS = 100


@dataclass(frozen=True)
class RoomProperties:
    """Settings for a room layout."""

    # Target number of rooms; fewer are placed when the map fills up
    rooms: int = 10

    def __post_init__(self) -> None:
        if self.rooms < 0:
            raise ValueError("Room count cannot be negative")


def _fill(grid: Grid, point: Point) -> None:
    """Mark a corridor cell, leaving occupied cells alone."""
    if grid[point] == EMPTY:
        grid[point] = OCCUPIED


def _connect_rooms(
    grid: Grid, rng: np.random.Generator, room: Rectangle, other: Rectangle
) -> None:
    """Carve a corridor between two non-intersecting rooms."""
    rows = room.rows_overlap(other)
    if rows is not None:
        row = int(rng.integers(rows[0], rows[1] + 1))
        west, east = (room, other) if room.left < other.left else (other, room)
        for x in range(west.right + 1, east.left):
            _fill(grid, Point(x, row))
        return

    columns = room.columns_overlap(other)
    if columns is not None:
        column = int(rng.integers(columns[0], columns[1] + 1))
        north, south = (room, other) if room.top < other.top else (other, room)
        for y in range(north.bottom + 1, south.top):
            _fill(grid, Point(column, y))
        return

    # Diagonal neighbours get a winding corridor
    grid.randompathto(rng, room.random_point(rng), other.random_point(rng), OCCUPIED)


def generate_room_layout(
    width: int,
    height: int,
    seed: int,
    properties: Optional[RoomProperties] = None,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[Grid, List[Rectangle]]:
    """
    Generate rooms and corridors.

    Returns:
        grid: uint8 grid, 1 for room and corridor cells, 0 elsewhere
        rooms: The accepted rooms in placement order
    """
    properties = properties if properties is not None else RoomProperties()
    rng = rng if rng is not None else make_rng(seed)
    grid = new_grid(width, height, dtype=np.uint8)
    rooms: List[Rectangle] = []

    if width < MIN_ROOM_SIZE or height < MIN_ROOM_SIZE:
        debug(f"A {width}x{height} map is too small for any room")
        return grid, rooms

    bounds = grid.rectangle()
    rejections = 0
    while len(rooms) < properties.rooms:
        candidate = Rectangle.random(
            rng,
            bounds,
            minwidth=MIN_ROOM_SIZE,
            maxwidth=max(MIN_ROOM_SIZE, width // 4),
            minheight=MIN_ROOM_SIZE,
            maxheight=max(MIN_ROOM_SIZE, height // 4),
        )
        if any(candidate.intersects(room) for room in rooms):
            rejections += 1
            if rejections >= MAX_ROOM_REJECTIONS:
                debug(
                    f"Gave up after {rejections} rejected rooms, "
                    f"placed {len(rooms)} of {properties.rooms}"
                )
                break
            continue

        rejections = 0
        for point in candidate.iter():
            grid.inc(point)
        if rooms:
            nearest = min(rooms, key=candidate.distance)
            _connect_rooms(grid, rng, candidate, nearest)
        rooms.append(candidate)

    return grid, rooms


def generate_rooms(
    width: int,
    height: int,
    seed: int,
    properties: Optional[RoomProperties] = None,
    rng: Optional[np.random.Generator] = None,
) -> Grid:
    """Generate rooms and corridors, returning only the grid."""
    grid, _rooms = generate_room_layout(width, height, seed, properties, rng)
    return grid


ROOM_GLYPH = "█"


def render_room_cell(grid: Grid, point: Point) -> str:
    return ROOM_GLYPH if grid[point] != EMPTY else " "


def render_rooms(grid: Grid) -> str:
    return render_text(grid, render_room_cell)
