"""s2runner: S2 cell coverings and composite identifier decoding over a line protocol.

This package provides:
- A stdin/stdout command loop answering ``cells`` and ``glob`` commands
- The underlying operations, built on s2sphere
- A subprocess client and spherical helpers for callers of the loop

Usage:
    from s2runner import collect_cells, parse_identifier
    collect_cells(["40.70", "-74.02", "40.71", "-74.01"])
"""

__version__ = "0.1.0"

from .config import Config
from .errors import CommandError
from .geo import LatLng
from .loop import CommandLoop
from .operations import GlobInfo, collect_cells, parse_identifier

__all__ = [
    "Config",
    "CommandError",
    "CommandLoop",
    "GlobInfo",
    "LatLng",
    "collect_cells",
    "parse_identifier",
]
