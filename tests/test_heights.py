"""Tests for height map generation and colouring."""

import numpy as np
import pytest

from mapgen.grid import Grid
from mapgen.heights import (
    TERRAIN_BANDS,
    HeightProperties,
    HeightRenderStyle,
    generate_heights,
    height_colour,
    render_heights,
)
from mapgen.point import Point
from mapgen.render import RenderedTextCell
from tests.helpers import ScriptedRng


class TestHeightGeneration:
    """Tests for generate_heights."""

    def test_same_seed_same_map(self):
        first = generate_heights(40, 20, 5)
        second = generate_heights(40, 20, 5)
        assert first == second
        assert first.dtype == np.uint16

    def test_large_rectangles_lose_their_corners(self):
        """A 3x3 rectangle raises the five cells of a plus shape."""
        rng = ScriptedRng([0, 0, 3, 3])
        grid = generate_heights(20, 20, 0, HeightProperties(iterations=1), rng=rng)
        assert int(grid.data.sum()) == 5
        for corner in (Point(0, 0), Point(2, 0), Point(0, 2), Point(2, 2)):
            assert grid[corner] == 0
        assert grid[Point(1, 1)] == 1

    def test_small_rectangles_keep_their_corners(self):
        rng = ScriptedRng([0, 0, 2, 2])
        grid = generate_heights(20, 20, 0, HeightProperties(iterations=1), rng=rng)
        assert int(grid.data.sum()) == 4
        assert grid[Point(0, 0)] == 1
        assert grid[Point(1, 1)] == 1

    def test_height_bounded_by_iterations(self):
        grid = generate_heights(10, 10, 3, HeightProperties(iterations=50))
        assert grid.max() <= 50
        assert grid.max() > 0

    def test_no_iterations(self):
        grid = generate_heights(10, 10, 3, HeightProperties(iterations=0))
        assert grid.max() == 0

    def test_tiny_maps(self):
        """Rectangles shrink to single cells on maps under five cells across."""
        grid = generate_heights(1, 1, 8, HeightProperties(iterations=10))
        assert grid[Point(0, 0)] == 10

    def test_negative_iterations_rejected(self):
        with pytest.raises(ValueError):
            HeightProperties(iterations=-1)


class TestHeightColours:
    """Tests for the colour ramps."""

    def test_simple_is_greyscale(self):
        assert height_colour(0, 0, 10, HeightRenderStyle.SIMPLE) == (0, 0, 0)
        assert height_colour(10, 0, 10, HeightRenderStyle.SIMPLE) == (255, 255, 255)
        assert height_colour(5, 0, 10, HeightRenderStyle.SIMPLE) == (127, 127, 127)

    def test_simple_uses_integer_scaling(self):
        """Grey levels are floor((value - low) * 255 / (high - low)), computed exactly."""
        assert height_colour(1, 0, 3, HeightRenderStyle.SIMPLE) == (85, 85, 85)
        assert height_colour(2, 0, 3, HeightRenderStyle.SIMPLE) == (170, 170, 170)
        assert height_colour(7, 4, 7, HeightRenderStyle.SIMPLE) == (255, 255, 255)

    def test_range_is_relative(self):
        """Colours depend on the position between the lowest and highest cell."""
        assert height_colour(20, 20, 30, HeightRenderStyle.SIMPLE) == (0, 0, 0)
        assert height_colour(30, 20, 30, HeightRenderStyle.SIMPLE) == (255, 255, 255)

    def test_flat_map(self):
        assert height_colour(4, 4, 4, HeightRenderStyle.SIMPLE) == (0, 0, 0)
        assert height_colour(4, 4, 4, HeightRenderStyle.HEATMAP) == (0, 0, 255)

    def test_heatmap_runs_blue_to_red(self):
        assert height_colour(0, 0, 100, HeightRenderStyle.HEATMAP) == (0, 0, 255)
        assert height_colour(50, 0, 100, HeightRenderStyle.HEATMAP) == (0, 255, 0)
        assert height_colour(100, 0, 100, HeightRenderStyle.HEATMAP) == (255, 0, 0)

    def test_terrain_bands(self):
        assert height_colour(0, 0, 100, HeightRenderStyle.TERRAIN) == TERRAIN_BANDS[0][1]
        assert height_colour(50, 0, 100, HeightRenderStyle.TERRAIN) == TERRAIN_BANDS[3][1]
        assert height_colour(100, 0, 100, HeightRenderStyle.TERRAIN) == TERRAIN_BANDS[-1][1]

    def test_render_heights(self):
        grid = Grid(2, 1, dtype=np.uint16)
        grid[Point(1, 0)] = 8
        cells = render_heights(grid)
        assert cells[Point(0, 0)] == RenderedTextCell(background=(0, 0, 0))
        assert cells[Point(1, 0)] == RenderedTextCell(background=(255, 255, 255))
        assert cells[Point(1, 0)].glyph == " "

    def test_render_heights_style(self):
        grid = Grid(2, 1, dtype=np.uint16)
        grid[Point(1, 0)] = 8
        cells = render_heights(grid, HeightRenderStyle.HEATMAP)
        assert cells[Point(0, 0)].background == (0, 0, 255)
        assert cells[Point(1, 0)].background == (255, 0, 0)
