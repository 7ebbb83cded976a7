"""Error types raised by the map generation engine."""


class MapGenError(Exception):
    """Base class for all mapgen errors."""


class OutOfBoundsError(MapGenError, IndexError):
    """A point was used outside of [0, width) x [0, height)."""


class NumericConversionError(MapGenError, OverflowError):
    """A coordinate or cell value does not fit its numeric type."""


class EmptyGridError(MapGenError, ValueError):
    """An aggregate was requested on a grid without cells."""
