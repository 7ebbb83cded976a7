"""Procedural map generation: pipe networks, height maps and room layouts."""

from mapgen.errors import (
    MapGenError,
    OutOfBoundsError,
    NumericConversionError,
    EmptyGridError,
)
from mapgen.point import Point, Direction, DIRECTIONS
from mapgen.rectangle import Rectangle
from mapgen.grid import Grid, MAX_PATH_RETRIES
from mapgen.rng import make_rng, random_seed
from mapgen.pipes import PipeProperties, generate_pipes, pipe_glyph, render_pipes
from mapgen.heights import (
    HeightProperties,
    HeightRenderStyle,
    generate_heights,
    height_colour,
    render_heights,
)
from mapgen.rooms import RoomProperties, generate_rooms, generate_room_layout, render_rooms
from mapgen.render import RenderedTextCell, render_text, render_ansi, render_image
from mapgen.connectivity import flood_fill, find_dead_ends, count_components
from mapgen.registry import MapGenerator, get_generator, list_generators, register_generator
