"""Points and directions on the map plane."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, TYPE_CHECKING

import numpy as np

from .errors import NumericConversionError

if TYPE_CHECKING:
    from .rectangle import Rectangle


class Direction(Enum):
    """Cardinal directions. Diagonal movement is not modelled."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    def opposite(self) -> "Direction":
        """Returns the opposite direction."""
        opposites = {
            Direction.NORTH: Direction.SOUTH,
            Direction.SOUTH: Direction.NORTH,
            Direction.EAST: Direction.WEST,
            Direction.WEST: Direction.EAST,
        }
        return opposites[self]

    def step(self) -> Tuple[int, int]:
        """Returns the (dx, dy) offset for moving one step in this direction."""
        steps = {
            Direction.NORTH: (0, -1),
            Direction.EAST: (1, 0),
            Direction.SOUTH: (0, 1),
            Direction.WEST: (-1, 0),
        }
        return steps[self]


# Neighbour order used everywhere adjacency is reported
DIRECTIONS: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)


@dataclass(frozen=True, order=True)
class Point:
    """A position on the map, measured in cells. Coordinates are unsigned."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise NumericConversionError(
                f"Point coordinates must be non-negative, got ({self.x}, {self.y})"
            )
        # Normalise numpy scalars so points hash and compare like plain ints
        object.__setattr__(self, "x", int(self.x))
        object.__setattr__(self, "y", int(self.y))

    @classmethod
    def random(cls, rng: np.random.Generator, bounds: "Rectangle") -> "Point":
        """Generate a uniformly random point within the rectangle (inclusive)."""
        x = int(rng.integers(bounds.left, bounds.right + 1))
        y = int(rng.integers(bounds.top, bounds.bottom + 1))
        return cls(x, y)

    def neighbour(
        self,
        direction: Direction,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> Optional["Point"]:
        """
        The adjacent point in the given direction.

        Returns None when stepping off the zero edge, or off the far edge when
        the corresponding bound is given. Without bounds the plane is unbounded
        to the east and south.
        """
        if direction == Direction.NORTH:
            if self.y == 0:
                return None
            return Point(self.x, self.y - 1)
        if direction == Direction.EAST:
            if width is not None and self.x >= width - 1:
                return None
            return Point(self.x + 1, self.y)
        if direction == Direction.SOUTH:
            if height is not None and self.y >= height - 1:
                return None
            return Point(self.x, self.y + 1)
        if self.x == 0:
            return None
        return Point(self.x - 1, self.y)

    def north(self) -> Optional["Point"]:
        return self.neighbour(Direction.NORTH)

    def east(self, width: Optional[int] = None) -> Optional["Point"]:
        return self.neighbour(Direction.EAST, width=width)

    def south(self, height: Optional[int] = None) -> Optional["Point"]:
        return self.neighbour(Direction.SOUTH, height=height)

    def west(self) -> Optional["Point"]:
        return self.neighbour(Direction.WEST)

    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(float(other.x) - float(self.x), float(other.y) - float(self.y))

    def rectangle(self, width: int, height: int) -> "Rectangle":
        """A rectangle with this point as its top left corner."""
        from .rectangle import Rectangle

        return Rectangle.new_dims(self.x, self.y, width, height)

    def square(self, size: int = 1) -> "Rectangle":
        return self.rectangle(size, size)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"
