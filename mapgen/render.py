"""
Rendering of finished grids.

Generators only produce numbers; this module turns a grid into something to
look at. Text output goes through a per-cell callback, coloured output through
grids of RenderedTextCell, which can be printed with ANSI escapes or painted
into an image.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

import cv2
import numpy as np
from PIL import Image as PILImage, ImageDraw, ImageFont

from .grid import Grid
from .point import Point

# Type Definitions
Colour = Tuple[int, int, int]
Image = np.ndarray
CellRenderer = Callable[[Grid, Point], str]

RESET = "\033[0m"

# Monospace fonts with box drawing glyphs, tried in order
FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu/DejaVuSansMono.ttf",
    "/Library/Fonts/Menlo.ttc",
    "/System/Library/Fonts/Menlo.ttc",
    "C:/Windows/Fonts/consola.ttf",
]


@dataclass(frozen=True)
class RenderedTextCell:
    """One rendered terminal cell: optional colours (RGB) and text."""

    background: Optional[Colour] = None
    foreground: Optional[Colour] = None
    text: Optional[str] = None

    @property
    def glyph(self) -> str:
        return self.text if self.text is not None else " "


def render_text(grid: Grid, rendercell: CellRenderer) -> str:
    """
    Render a grid as text, one rendercell call per point in row-major order.

    Rows are separated by line breaks; there is no trailing newline.
    """
    output: List[str] = []
    for point, _value in grid.iter():
        if point.x == 0 and point.y > 0:
            output.append("\n")
        output.append(rendercell(grid, point))
    return "".join(output)


def ansi_cell(cell: RenderedTextCell) -> str:
    """A single cell with 24-bit colour escape codes."""
    codes = ""
    if cell.background is not None:
        r, g, b = cell.background
        codes += f"\033[48;2;{r};{g};{b}m"
    if cell.foreground is not None:
        r, g, b = cell.foreground
        codes += f"\033[38;2;{r};{g};{b}m"
    return codes + cell.glyph


def render_ansi(cells: Grid) -> str:
    """Render a grid of RenderedTextCell for a true colour terminal."""
    lines: List[str] = []
    for y in range(cells.height):
        line = "".join(ansi_cell(cells[Point(x, y)]) for x in range(cells.width))
        lines.append(line + RESET)
    return "\n".join(lines)


def load_font(size: int) -> Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]:
    """Load a monospace font, falling back to Pillow's built-in one."""
    for path in FONT_PATHS:
        try:
            return ImageFont.truetype(path, size)
        except (IOError, OSError):
            continue
    return ImageFont.load_default()


def render_image(
    cells: Grid,
    cell_size: int = 8,
    default_background: Colour = (0, 0, 0),
    default_foreground: Colour = (230, 230, 230),
) -> Image:
    """
    Paint a grid of RenderedTextCell into a BGR image.

    Each cell becomes a cell_size square filled with its background colour.
    Cells with text get the glyph drawn on top with Pillow.
    """
    if cell_size < 1:
        raise ValueError(f"Cell size must be positive, got {cell_size}")

    height = cells.height * cell_size
    width = cells.width * cell_size
    image: Image = np.zeros((height, width, 3), np.uint8)

    glyphs: List[Tuple[Point, RenderedTextCell]] = []
    for point, cell in cells.iter():
        r, g, b = cell.background if cell.background is not None else default_background
        x0 = point.x * cell_size
        y0 = point.y * cell_size
        image[y0 : y0 + cell_size, x0 : x0 + cell_size] = (b, g, r)
        if cell.text is not None and cell.text.strip():
            glyphs.append((point, cell))

    if not glyphs:
        return image

    # Convert BGR numpy array to RGB PIL Image for text drawing
    pil_image = PILImage.fromarray(cv2.cvtColor(image, cv2.COLOR_BGR2RGB))
    draw = ImageDraw.Draw(pil_image)
    font = load_font(cell_size)
    for point, cell in glyphs:
        fill = cell.foreground if cell.foreground is not None else default_foreground
        draw.text((point.x * cell_size, point.y * cell_size), cell.glyph, fill=fill, font=font)

    # Convert back to BGR numpy array
    return cv2.cvtColor(np.array(pil_image), cv2.COLOR_RGB2BGR)


def render_glyph_image(
    grid: Grid,
    rendercell: CellRenderer,
    cell_size: int = 16,
    foreground: Colour = (230, 230, 230),
    background: Colour = (0, 0, 0),
) -> Image:
    """Draw the text rendering of a grid into an image."""
    cells = grid.map_into(
        lambda point, _value: RenderedTextCell(
            background=background, foreground=foreground, text=rendercell(grid, point)
        )
    )
    return render_image(cells, cell_size=cell_size)


def save_image(image: Image, path: Union[str, Path]) -> Path:
    """Write an image to disk; the format follows the file extension."""
    output_path = Path(path)
    if not cv2.imwrite(str(output_path), image):
        raise OSError(f"Could not write image to {output_path}")
    return output_path
