"""Registry of the available map generators, looked up by name."""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .grid import Grid
from .heights import HeightProperties, HeightRenderStyle, generate_heights, render_heights
from .pipes import PipeProperties, generate_pipes, render_pipe_cell, render_pipes
from .point import Point
from .render import render_ansi
from .rooms import RoomProperties, generate_rooms, render_room_cell, render_rooms

# generate(width, height, seed, properties) -> Grid
GenerateFunction = Callable[[int, int, int, Any], Grid]


@dataclass(frozen=True)
class MapGenerator:
    """A generator with its properties type and a terminal renderer."""

    name: str
    properties_type: type
    generate: GenerateFunction
    render_text: Callable[[Grid], str]
    # Glyph for a single cell, for generators drawn with text
    render_cell: Optional[Callable[[Grid, Point], str]] = None
    # render_cells(grid, style) builds RenderedTextCells for coloured output
    render_cells: Optional[Callable[..., Grid]] = None


# Registry of available generators
_GENERATORS: dict[str, MapGenerator] = {}


def register_generator(name: str, generator: MapGenerator) -> None:
    """Register a generator under its name."""
    _GENERATORS[name] = generator


def get_generator(name: str) -> MapGenerator:
    """Get a generator by name."""
    if name not in _GENERATORS:
        raise ValueError(f"Unknown generator: {name}")
    return _GENERATORS[name]


def list_generators() -> list[str]:
    """List all registered generator names."""
    return sorted(_GENERATORS.keys())


def _render_heights_ansi(grid: Grid) -> str:
    return render_ansi(render_heights(grid, HeightRenderStyle.SIMPLE))


register_generator(
    "pipes",
    MapGenerator(
        "pipes", PipeProperties, generate_pipes, render_pipes, render_cell=render_pipe_cell
    ),
)
register_generator(
    "heights",
    MapGenerator(
        "heights",
        HeightProperties,
        generate_heights,
        _render_heights_ansi,
        render_cells=render_heights,
    ),
)
register_generator(
    "rooms",
    MapGenerator(
        "rooms", RoomProperties, generate_rooms, render_rooms, render_cell=render_room_cell
    ),
)
