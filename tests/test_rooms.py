"""Tests for room layout generation."""

import numpy as np
import pytest

from mapgen.connectivity import count_components, flood_fill
from mapgen.grid import Grid
from mapgen.point import Point
from mapgen.rectangle import Rectangle
from mapgen.rng import make_rng
from mapgen.rooms import (
    MIN_ROOM_SIZE,
    ROOM_GLYPH,
    RoomProperties,
    _connect_rooms,
    generate_room_layout,
    generate_rooms,
    render_rooms,
)
from tests.helpers import ScriptedRng


def mark(grid, room):
    for point in room:
        grid[point] = 1


class TestRoomLayout:
    """Tests for generate_room_layout."""

    def test_same_seed_same_layout(self):
        first_grid, first_rooms = generate_room_layout(40, 20, 3)
        second_grid, second_rooms = generate_room_layout(40, 20, 3)
        assert first_grid == second_grid
        assert first_rooms == second_rooms

    def test_rooms_do_not_overlap(self):
        for seed in range(10):
            _grid, rooms = generate_room_layout(60, 30, seed, RoomProperties(rooms=12))
            for i, room in enumerate(rooms):
                for other in rooms[i + 1 :]:
                    assert not room.intersects(other)

    def test_room_sizes(self):
        _grid, rooms = generate_room_layout(60, 40, 2)
        assert rooms
        for room in rooms:
            assert MIN_ROOM_SIZE <= room.width <= 15
            assert MIN_ROOM_SIZE <= room.height <= 10

    def test_room_cells_are_marked(self):
        grid, rooms = generate_room_layout(40, 20, 5, RoomProperties(rooms=5))
        for room in rooms:
            for point in room:
                assert grid[point] > 0
        # Rooms never overlap, so at most a corridor lies underneath a room
        assert grid.max() <= 2

    def test_rooms_are_connected(self):
        grid, rooms = generate_room_layout(40, 20, 7, RoomProperties(rooms=4))
        assert len(rooms) == 4
        assert count_components(grid) == 1
        reached = flood_fill(grid, rooms[0].topleft)
        for room in rooms[1:]:
            assert room.topleft in reached

    def test_crowded_map_gives_up(self):
        """Only four 3x3 rooms fit on a 6x6 map; the rest are rejected."""
        grid, rooms = generate_room_layout(6, 6, 1, RoomProperties(rooms=50))
        assert 1 <= len(rooms) <= 4

    def test_map_too_small_for_rooms(self):
        grid, rooms = generate_room_layout(2, 2, 1)
        assert rooms == []
        assert grid.max() == 0

    def test_zero_rooms(self):
        grid = generate_rooms(10, 10, 1, RoomProperties(rooms=0))
        assert grid.max() == 0

    def test_generate_rooms_matches_layout(self):
        grid, _rooms = generate_room_layout(30, 30, 12)
        assert generate_rooms(30, 30, 12) == grid
        assert grid.dtype == np.uint8

    def test_negative_room_count_rejected(self):
        with pytest.raises(ValueError):
            RoomProperties(rooms=-3)


class TestCorridors:
    """Tests for joining two rooms."""

    def test_horizontal_corridor(self):
        grid = Grid(10, 5)
        west = Rectangle.new_dims(0, 0, 3, 3)
        east = Rectangle.new_dims(6, 1, 3, 3)
        mark(grid, west)
        mark(grid, east)
        # Shared rows are 1..2; pick row 2
        _connect_rooms(grid, ScriptedRng([2]), east, west)
        assert [grid[Point(x, 2)] for x in range(3, 6)] == [1, 1, 1]
        assert [grid[Point(x, 1)] for x in range(3, 6)] == [0, 0, 0]

    def test_vertical_corridor(self):
        grid = Grid(5, 10)
        north = Rectangle.new_dims(0, 0, 3, 3)
        south = Rectangle.new_dims(1, 6, 3, 3)
        mark(grid, north)
        mark(grid, south)
        _connect_rooms(grid, ScriptedRng([1]), north, south)
        assert [grid[Point(1, y)] for y in range(3, 6)] == [1, 1, 1]
        assert grid[Point(2, 4)] == 0

    def test_touching_rooms_need_no_corridor(self):
        grid = Grid(6, 3)
        west = Rectangle.new_dims(0, 0, 3, 3)
        east = Rectangle.new_dims(3, 0, 3, 3)
        mark(grid, west)
        mark(grid, east)
        _connect_rooms(grid, ScriptedRng([0]), west, east)
        assert grid.min() == 1

    def test_diagonal_corridor(self):
        grid = Grid(12, 12)
        first = Rectangle.new_dims(0, 0, 3, 3)
        second = Rectangle.new_dims(7, 6, 3, 3)
        mark(grid, first)
        mark(grid, second)
        _connect_rooms(grid, make_rng(4), first, second)
        assert count_components(grid) == 1


class TestRoomRendering:
    def test_render(self):
        grid = Grid(3, 2)
        grid[Point(1, 0)] = 1
        grid[Point(2, 1)] = 2
        assert render_rooms(grid) == f" {ROOM_GLYPH} \n  {ROOM_GLYPH}"
