"""
Diagnostics for map generation.

Everything goes to stderr so stdout stays usable for the rendered map.
"""

import sys

_verbose: bool = False


def set_verbose(verbose: bool) -> None:
    """Enable or disable diagnostic output."""
    global _verbose
    _verbose = verbose


def is_verbose() -> bool:
    return _verbose


def log(message: str) -> None:
    """Log to stderr to avoid corrupting stdout output."""
    print(message, file=sys.stderr)


def debug(message: str) -> None:
    """Log only when verbose output is enabled."""
    if _verbose:
        log(message)
