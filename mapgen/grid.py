"""
The dense grid shared by every generator.

A grid is a row-major numpy array of shape (height, width). Cells are indexed
with Points, so grid[point] reads data[point.y, point.x]. Two numeric types are
involved:

- the value type (``dtype``), an integer type for the cells. Generators use
  the value to encode meaning (0 is always "empty"), and accumulate into it
  with saturating arithmetic so cells clamp instead of wrapping around.
- the scale type (``scale``), an unsigned integer type the grid dimensions
  must fit in. It bounds how large a grid can be.

Grids of other cell types (rendered cells, glyphs) are made with map_into and
use the object dtype; only get/set/iteration make sense on those.
"""

from typing import Any, Callable, Iterator, List, Tuple

import numpy as np

from .errors import EmptyGridError, NumericConversionError, OutOfBoundsError
from .point import DIRECTIONS, Direction, Point
from .rectangle import Rectangle
from .rng import coin

# A first step into an occupied cell restarts the walk at most this many times
MAX_PATH_RETRIES = 5


class Grid:
    """A fixed size 2D array of cells addressed by Point."""

    def __init__(
        self,
        width: int,
        height: int,
        dtype: Any = np.uint8,
        scale: Any = np.uint16,
    ) -> None:
        self.scale = np.dtype(scale)
        if self.scale.kind != "u":
            raise TypeError(f"Scale type must be an unsigned integer type, got {self.scale}")
        limit = np.iinfo(self.scale).max
        for name, extent in (("width", width), ("height", height)):
            if extent < 0 or extent > limit:
                raise NumericConversionError(
                    f"Grid {name} {extent} does not fit scale type {self.scale} (0..{limit})"
                )

        self.data: np.ndarray = np.zeros((int(height), int(width)), dtype=dtype)

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @property
    def size(self) -> int:
        """Number of cells."""
        return self.data.size

    @property
    def dtype(self) -> np.dtype:
        return self.data.dtype

    def is_numeric(self) -> bool:
        return self.data.dtype.kind in "iu"

    def rectangle(self) -> Rectangle:
        """The rectangle covering the whole grid."""
        return Rectangle.new_dims(0, 0, self.width, self.height)

    def contains(self, point: Point) -> bool:
        return point.x < self.width and point.y < self.height

    def _check(self, point: Point) -> None:
        if not self.contains(point):
            raise OutOfBoundsError(
                f"Point {point} is outside of the {self.width}x{self.height} grid"
            )

    def _check_value(self, value: Any) -> None:
        if not self.is_numeric():
            return
        info = np.iinfo(self.data.dtype)
        if not info.min <= value <= info.max:
            raise NumericConversionError(
                f"Value {value} does not fit cell type {self.data.dtype} ({info.min}..{info.max})"
            )

    def get(self, point: Point) -> Any:
        """The value at a point, as a plain Python value."""
        self._check(point)
        value = self.data[point.y, point.x]
        if isinstance(value, np.generic):
            return value.item()
        return value

    def set(self, point: Point, value: Any) -> None:
        self._check(point)
        self._check_value(value)
        self.data[point.y, point.x] = value

    def __getitem__(self, point: Point) -> Any:
        return self.get(point)

    def __setitem__(self, point: Point, value: Any) -> None:
        self.set(point, value)

    def inc(self, point: Point, amount: int = 1) -> bool:
        """
        Add to a cell, saturating at the cell type's maximum.

        Returns False when the result was clamped.
        """
        info = np.iinfo(self.data.dtype)
        result = self.get(point) + amount
        if result > info.max:
            self.data[point.y, point.x] = info.max
            return False
        if result < info.min:
            self.data[point.y, point.x] = info.min
            return False
        self.data[point.y, point.x] = result
        return True

    def dec(self, point: Point, amount: int = 1) -> bool:
        """
        Subtract from a cell, saturating at the cell type's minimum.

        Returns False when the result was clamped.
        """
        return self.inc(point, -amount)

    def hasneighbour(self, point: Point, direction: Direction) -> bool:
        """Is the adjacent cell in the given direction inside the grid and occupied?"""
        neighbour = point.neighbour(direction, self.width, self.height)
        if neighbour is None:
            return False
        return self[neighbour] > 0

    def hasneighbours(self, point: Point) -> Tuple[bool, bool, bool, bool]:
        """Occupancy of the north, east, south and west neighbours."""
        north, east, south, west = (self.hasneighbour(point, d) for d in DIRECTIONS)
        return (north, east, south, west)

    def countneighbours(self, point: Point) -> int:
        return sum(self.hasneighbours(point))

    def getneighbours(self, point: Point) -> List[Point]:
        """Occupied neighbours in north, east, south, west order."""
        neighbours: List[Point] = []
        for direction in DIRECTIONS:
            neighbour = point.neighbour(direction, self.width, self.height)
            if neighbour is not None and self[neighbour] > 0:
                neighbours.append(neighbour)
        return neighbours

    def min(self) -> Any:
        if self.size == 0:
            raise EmptyGridError("Grid has no cells")
        return self.data.min().item()

    def max(self) -> Any:
        if self.size == 0:
            raise EmptyGridError("Grid has no cells")
        return self.data.max().item()

    def iter(self) -> Iterator[Tuple[Point, Any]]:
        """(point, value) pairs in row-major order."""
        for point in self.rectangle().iter() if self.size else ():
            yield point, self.get(point)

    def __iter__(self) -> Iterator[Tuple[Point, Any]]:
        return self.iter()

    def map_into(self, func: Callable[[Point, Any], Any], dtype: Any = object) -> "Grid":
        """
        Build a new grid of a different cell type.

        Each cell of the result is func(point, value) for the matching cell of
        this grid. Used to turn a numeric grid into a grid of renderable cells.
        """
        result = Grid(self.width, self.height, dtype=dtype, scale=self.scale)
        for point, value in self.iter():
            result.set(point, func(point, value))
        return result

    def copy(self) -> "Grid":
        result = Grid(self.width, self.height, dtype=self.data.dtype, scale=self.scale)
        result.data[...] = self.data
        return result

    def add(self, other: "Grid") -> bool:
        """
        Add another grid cell by cell over the area both grids cover.

        Saturates like inc; returns False if any cell was clamped.
        """
        exact = True
        for y in range(min(self.height, other.height)):
            for x in range(min(self.width, other.width)):
                point = Point(x, y)
                exact = self.inc(point, other[point]) and exact
        return exact

    def sub(self, other: "Grid") -> bool:
        """Subtract another grid cell by cell; the counterpart of add."""
        exact = True
        for y in range(min(self.height, other.height)):
            for x in range(min(self.width, other.width)):
                point = Point(x, y)
                exact = self.dec(point, other[point]) and exact
        return exact

    def randompathto(
        self,
        rng: np.random.Generator,
        start: Point,
        target: Point,
        value: Any,
    ) -> None:
        """
        Carve a random path from start to target.

        Every step moves one cell closer to target: along whichever axis is
        still misaligned, or along a coin-flipped axis while both are. Empty
        cells along the way (target included, start excluded) are set to
        value; occupied cells are left alone.

        A path whose very first step runs into an occupied cell would add
        nothing next to start, so the walk is restarted with fresh coin flips.
        After MAX_PATH_RETRIES restarts the walk goes ahead regardless.
        """
        self._check(start)
        self._check(target)
        self._check_value(value)

        retries = 0
        while not self._walk(rng, start, target, value, guard=retries < MAX_PATH_RETRIES):
            retries += 1

    def _walk(
        self,
        rng: np.random.Generator,
        start: Point,
        target: Point,
        value: Any,
        guard: bool,
    ) -> bool:
        walk = start
        first_step = True
        while walk != target:
            walk = _step_towards(rng, walk, target)
            if self[walk] == 0:
                self[walk] = value
            elif first_step and guard and walk != target:
                # Nothing has been written yet, so giving up here is free
                return False
            first_step = False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.data.dtype == other.data.dtype and np.array_equal(self.data, other.data)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, dtype={self.data.dtype})"


def _step_towards(rng: np.random.Generator, walk: Point, target: Point) -> Point:
    """One step from walk towards target, reducing the Manhattan distance by one."""
    misaligned_x = walk.x != target.x
    misaligned_y = walk.y != target.y
    if misaligned_x and (not misaligned_y or coin(rng)):
        dx = 1 if target.x > walk.x else -1
        return Point(walk.x + dx, walk.y)
    dy = 1 if target.y > walk.y else -1
    return Point(walk.x, walk.y + dy)


def new_grid(width: int, height: int, dtype: Any = np.uint8) -> Grid:
    """Convenience constructor validating generator dimensions."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Map dimensions must be positive, got {width}x{height}")
    return Grid(width, height, dtype=dtype)
