"""
Reachability over occupied cells.

Nothing here is stored: adjacency is worked out from the cell values every
time, the same way the generators see the grid.
"""

from collections import deque
from typing import Callable, Deque, List, Optional, Set

from .grid import Grid
from .point import DIRECTIONS, Point

# Decides whether a cell value can be walked through
IsOpen = Callable[[int], bool]


def is_occupied(value: int) -> bool:
    return value > 0


def _open_neighbours(grid: Grid, point: Point, is_open: IsOpen) -> List[Point]:
    neighbours: List[Point] = []
    for direction in DIRECTIONS:
        neighbour = point.neighbour(direction, grid.width, grid.height)
        if neighbour is not None and is_open(grid[neighbour]):
            neighbours.append(neighbour)
    return neighbours


def flood_fill(grid: Grid, start: Point, is_open: Optional[IsOpen] = None) -> Set[Point]:
    """
    All cells reachable from start through open cells (occupied by default).

    Movement is 4-directional. The start cell is always part of the result,
    even when it is not open itself.
    """
    is_open = is_open or is_occupied
    visited: Set[Point] = {start}
    queue: Deque[Point] = deque([start])

    while queue:
        point = queue.popleft()
        for neighbour in _open_neighbours(grid, point, is_open):
            if neighbour not in visited:
                visited.add(neighbour)
                queue.append(neighbour)

    return visited


def find_dead_ends(grid: Grid, minimum: int = 1) -> List[Point]:
    """Cells with a value of at least minimum and exactly one occupied neighbour."""
    return [
        point
        for point, value in grid.iter()
        if value >= minimum and grid.countneighbours(point) == 1
    ]


def count_components(grid: Grid, is_open: Optional[IsOpen] = None) -> int:
    """Number of separate 4-connected groups of open cells."""
    is_open = is_open or is_occupied
    seen: Set[Point] = set()
    components = 0
    for point, value in grid.iter():
        if point in seen or not is_open(value):
            continue
        components += 1
        seen |= flood_fill(grid, point, is_open)
    return components
