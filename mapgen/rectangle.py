"""Axis-aligned rectangles with inclusive corners."""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from .point import Point


@dataclass(frozen=True)
class Rectangle:
    """
    A rectangular region of cells.

    Both corners are inclusive, so a rectangle always covers at least one cell.
    The other two corners are derived rather than stored.
    """

    topleft: Point
    bottomright: Point

    def __post_init__(self) -> None:
        if self.bottomright.x < self.topleft.x or self.bottomright.y < self.topleft.y:
            raise ValueError(
                f"Invalid rectangle: bottom right {self.bottomright} lies above or left "
                f"of top left {self.topleft}"
            )

    @classmethod
    def new_dims(cls, x: int, y: int, width: int, height: int) -> "Rectangle":
        """Build a rectangle from its top left corner and its extent."""
        if width < 1 or height < 1:
            raise ValueError(f"Rectangle extent must be positive, got {width}x{height}")
        return cls(Point(x, y), Point(x + width - 1, y + height - 1))

    @classmethod
    def random(
        cls,
        rng: np.random.Generator,
        bounds: "Rectangle",
        minwidth: Optional[int] = None,
        maxwidth: Optional[int] = None,
        minheight: Optional[int] = None,
        maxheight: Optional[int] = None,
    ) -> "Rectangle":
        """
        Draw a random rectangle that fits entirely inside bounds.

        The top left corner is drawn first from the positions that leave room
        for the minimum extent, then the extent is drawn from what remains up
        to the maximum. Missing limits default to 1 and to the bounds extent; a
        maximum below the minimum is raised to the minimum.

        Raises:
            ValueError: If the bounds cannot hold the minimum extent.
        """
        minwidth = 1 if minwidth is None else minwidth
        minheight = 1 if minheight is None else minheight
        maxwidth = bounds.width if maxwidth is None else max(maxwidth, minwidth)
        maxheight = bounds.height if maxheight is None else max(maxheight, minheight)
        if minwidth < 1 or minheight < 1:
            raise ValueError("Minimum rectangle extent must be at least 1")
        if bounds.width < minwidth or bounds.height < minheight:
            raise ValueError(
                f"Bounds of {bounds.width}x{bounds.height} cannot hold a "
                f"{minwidth}x{minheight} rectangle"
            )

        left = int(rng.integers(bounds.left, bounds.right + 2 - minwidth))
        top = int(rng.integers(bounds.top, bounds.bottom + 2 - minheight))
        width = int(rng.integers(minwidth, min(maxwidth, bounds.right - left + 1) + 1))
        height = int(rng.integers(minheight, min(maxheight, bounds.bottom - top + 1) + 1))
        return cls.new_dims(left, top, width, height)

    @property
    def width(self) -> int:
        return self.bottomright.x - self.topleft.x + 1

    @property
    def height(self) -> int:
        return self.bottomright.y - self.topleft.y + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_square(self) -> bool:
        """Is the rectangle as wide as it is tall?"""
        return self.width == self.height

    @property
    def topright(self) -> Point:
        return Point(self.bottomright.x, self.topleft.y)

    @property
    def bottomleft(self) -> Point:
        return Point(self.topleft.x, self.bottomright.y)

    @property
    def left(self) -> int:
        return self.topleft.x

    @property
    def right(self) -> int:
        return self.bottomright.x

    @property
    def top(self) -> int:
        return self.topleft.y

    @property
    def bottom(self) -> int:
        return self.bottomright.y

    @property
    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Corners in clockwise order starting at the top left."""
        return (self.topleft, self.topright, self.bottomright, self.bottomleft)

    def contains(self, point: Point) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def __contains__(self, point: object) -> bool:
        return isinstance(point, Point) and self.contains(point)

    def intersects(self, other: "Rectangle") -> bool:
        """True when the rectangles share at least one cell."""
        return (
            self.right >= other.left
            and self.left <= other.right
            and self.bottom >= other.top
            and self.top <= other.bottom
        )

    def rows_overlap(self, other: "Rectangle") -> Optional[Tuple[int, int]]:
        """The inclusive range of rows both rectangles cover, if any."""
        top = max(self.top, other.top)
        bottom = min(self.bottom, other.bottom)
        if top > bottom:
            return None
        return (top, bottom)

    def columns_overlap(self, other: "Rectangle") -> Optional[Tuple[int, int]]:
        """The inclusive range of columns both rectangles cover, if any."""
        left = max(self.left, other.left)
        right = min(self.right, other.right)
        if left > right:
            return None
        return (left, right)

    def distance(self, other: "Rectangle") -> float:
        """
        Approximate distance between two rectangles.

        This is the shortest distance between any corner of this rectangle and
        any corner of the other, which is good enough to rank candidates but
        is not the true geometric distance.
        """
        return min(a.distance(b) for a in self.corners for b in other.corners)

    def random_point(self, rng: np.random.Generator) -> Point:
        return Point.random(rng, self)

    def iter(self) -> Iterator[Point]:
        """Every point in the rectangle, row by row."""
        for y in range(self.top, self.bottom + 1):
            for x in range(self.left, self.right + 1):
                yield Point(x, y)

    def __iter__(self) -> Iterator[Point]:
        return self.iter()

    def __len__(self) -> int:
        return self.area

    def __str__(self) -> str:
        return f"[{self.topleft}-{self.bottomright}]"
