"""Tests for text, ANSI and image rendering."""

import cv2
import numpy as np
import pytest

from mapgen.grid import Grid
from mapgen.point import Point
from mapgen.render import (
    RESET,
    RenderedTextCell,
    ansi_cell,
    render_ansi,
    render_glyph_image,
    render_image,
    render_text,
    save_image,
)


def cell_grid(cells):
    """Build an object grid from rows of RenderedTextCell."""
    grid = Grid(len(cells[0]), len(cells), dtype=object)
    for y, row in enumerate(cells):
        for x, cell in enumerate(row):
            grid[Point(x, y)] = cell
    return grid


class TestRenderText:
    """Tests for render_text."""

    def test_rows_and_no_trailing_newline(self):
        grid = Grid(3, 2)
        grid[Point(1, 1)] = 1
        text = render_text(grid, lambda g, p: "#" if g[p] else ".")
        assert text == "...\n.#."

    def test_called_in_row_major_order(self):
        grid = Grid(2, 2)
        seen = []

        def record(g, point):
            seen.append(point)
            return "x"

        render_text(grid, record)
        assert seen == [Point(0, 0), Point(1, 0), Point(0, 1), Point(1, 1)]

    def test_single_row(self):
        assert render_text(Grid(4, 1), lambda g, p: "-") == "----"


class TestRenderAnsi:
    """Tests for the 24-bit colour output."""

    def test_cell_escapes(self):
        cell = RenderedTextCell(background=(1, 2, 3), foreground=(4, 5, 6), text="x")
        assert ansi_cell(cell) == "\033[48;2;1;2;3m\033[38;2;4;5;6mx"

    def test_plain_cell(self):
        assert ansi_cell(RenderedTextCell()) == " "

    def test_lines_end_with_reset(self):
        cells = cell_grid(
            [
                [RenderedTextCell(background=(10, 20, 30)), RenderedTextCell(text="a")],
                [RenderedTextCell(), RenderedTextCell(foreground=(0, 0, 0), text="b")],
            ]
        )
        output = render_ansi(cells)
        lines = output.split("\n")
        assert len(lines) == 2
        assert lines[0] == "\033[48;2;10;20;30m a" + RESET
        assert lines[1] == " \033[38;2;0;0;0mb" + RESET


class TestRenderImage:
    """Tests for image output."""

    def test_backgrounds_become_bgr_blocks(self):
        cells = cell_grid([[RenderedTextCell(background=(255, 0, 0)), RenderedTextCell()]])
        image = render_image(cells, cell_size=4)
        assert image.shape == (4, 8, 3)
        assert image.dtype == np.uint8
        # Red in BGR order
        assert image[0, 0].tolist() == [0, 0, 255]
        assert image[3, 3].tolist() == [0, 0, 255]
        # Default background
        assert image[0, 4].tolist() == [0, 0, 0]

    def test_glyphs_are_drawn(self):
        cells = cell_grid([[RenderedTextCell(text="#", foreground=(255, 255, 255))]])
        image = render_image(cells, cell_size=16)
        assert image.shape == (16, 16, 3)
        assert image.max() > 0

    def test_cell_size_must_be_positive(self):
        with pytest.raises(ValueError):
            render_image(cell_grid([[RenderedTextCell()]]), cell_size=0)

    def test_glyph_image(self):
        grid = Grid(3, 2)
        grid[Point(0, 0)] = 1
        image = render_glyph_image(grid, lambda g, p: "#" if g[p] else " ", cell_size=10)
        assert image.shape == (20, 30, 3)
        # Only the first cell has a glyph
        assert image[:, 10:].max() == 0
        assert image[:10, :10].max() > 0

    def test_save_image(self, tmp_path):
        cells = cell_grid([[RenderedTextCell(background=(0, 255, 0))]])
        path = save_image(render_image(cells, cell_size=5), tmp_path / "cell.png")
        assert path.exists()
        loaded = cv2.imread(str(path))
        assert loaded.shape == (5, 5, 3)
        assert loaded[2, 2].tolist() == [0, 255, 0]
