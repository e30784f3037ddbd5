"""The two runner operations: fixed-level cell coverings and glob decoding.

Both are thin wrappers around s2sphere. Parameters arrive as the raw string
tokens of a command line; validation failures raise ``CommandError``
subclasses from ``s2runner.errors``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import List, Sequence

import s2sphere

from .errors import InvalidArgumentCount, InvalidIdentifier, InvalidNumber

DEFAULT_LEVEL = 16
DEFAULT_MAX_CELLS = 8

# Composite identifier layout: 16 hex chars of cell id, amount byte at [len-4, len-2)
CELL_ID_LENGTH = 16
AMOUNT_END_OFFSET = 2
AMOUNT_START_OFFSET = 4
MIN_GLOB_LENGTH = CELL_ID_LENGTH + AMOUNT_START_OFFSET

_CELL_ID_RE = re.compile(r"[0-9a-fA-F]{16}")
_AMOUNT_RE = re.compile(r"[0-9a-fA-F]{2}")


@dataclass(frozen=True)
class GlobInfo:
    """Decoded composite identifier."""

    lat: float
    lng: float
    amount: int
    cell_id: int

    def lines(self) -> List[str]:
        """Protocol output lines: latitude, longitude, amount."""
        return [str(self.lat), str(self.lng), str(self.amount)]


def _expect_params(verb: str, params: Sequence[str], expected: int) -> None:
    if len(params) != expected:
        noun = "parameter" if expected == 1 else "parameters"
        raise InvalidArgumentCount(
            f'"{verb}" command expects {expected} {noun}, {len(params)} given'
        )


def parse_degrees(value: str) -> float:
    """Parse a decimal degree value, rejecting NaN and infinities."""
    try:
        degrees = float(value)
    except ValueError:
        raise InvalidNumber(f"{value!r} is not a decimal number") from None
    if not math.isfinite(degrees):
        raise InvalidNumber(f"{value!r} is not a finite number")
    return degrees


def make_coverer(level: int = DEFAULT_LEVEL, max_cells: int = DEFAULT_MAX_CELLS) -> s2sphere.RegionCoverer:
    """Build a region coverer restricted to cells of exactly ``level``."""
    coverer = s2sphere.RegionCoverer()
    coverer.min_level = level
    coverer.max_level = level
    coverer.max_cells = max_cells
    return coverer


def cover_rect(
    sw_lat: float,
    sw_lng: float,
    ne_lat: float,
    ne_lng: float,
    level: int = DEFAULT_LEVEL,
    max_cells: int = DEFAULT_MAX_CELLS,
) -> List[s2sphere.CellId]:
    """Cover the minimal rectangle spanning both corners with level cells.

    The corners may be given in any order.
    """
    rect = s2sphere.LatLngRect.from_point_pair(
        s2sphere.LatLng.from_degrees(sw_lat, sw_lng),
        s2sphere.LatLng.from_degrees(ne_lat, ne_lng),
    )
    return make_coverer(level, max_cells).get_covering(rect)


def format_cell_id(cell_id: s2sphere.CellId) -> str:
    """Lowercase hex of the 64-bit id, without zero padding."""
    return format(cell_id.id(), "x")


def collect_cells(
    params: Sequence[str],
    level: int = DEFAULT_LEVEL,
    max_cells: int = DEFAULT_MAX_CELLS,
) -> List[str]:
    """Run the ``cells`` command.

    Args:
        params: ``swLat swLng neLat neLng`` as strings.
        level: Fixed subdivision level of every returned cell.
        max_cells: Coverer cell budget; exceeded when the level forces it.

    Returns:
        Hex cell ids in the order the coverer returned them.
    """
    _expect_params("cells", params, 4)
    sw_lat, sw_lng, ne_lat, ne_lng = (parse_degrees(p) for p in params)
    cells = cover_rect(sw_lat, sw_lng, ne_lat, ne_lng, level=level, max_cells=max_cells)
    return [format_cell_id(cell) for cell in cells]


def amount_slice(identifier: str, allow_overlap: bool = False) -> str:
    """Return the two amount characters at ``[len-4, len-2)``.

    Unless ``allow_overlap`` is set, the slice must start after the cell id
    prefix, so identifiers shorter than 20 characters are rejected.
    """
    min_length = MIN_GLOB_LENGTH if not allow_overlap else CELL_ID_LENGTH
    if len(identifier) < min_length:
        raise InvalidIdentifier(
            f"identifier {identifier!r} is {len(identifier)} characters, at least {min_length} required"
        )
    return identifier[len(identifier) - AMOUNT_START_OFFSET:len(identifier) - AMOUNT_END_OFFSET]


def parse_identifier(params: Sequence[str], allow_overlap: bool = False) -> GlobInfo:
    """Run the ``glob`` command on a single composite identifier."""
    _expect_params("glob", params, 1)
    identifier = params[0]

    prefix = identifier[:CELL_ID_LENGTH]
    if not _CELL_ID_RE.fullmatch(prefix):
        raise InvalidIdentifier(f"{prefix!r} is not a 16-digit hexadecimal cell id")
    cell_id = int(prefix, 16)

    amount_hex = amount_slice(identifier, allow_overlap=allow_overlap)
    if not _AMOUNT_RE.fullmatch(amount_hex):
        raise InvalidIdentifier(f"amount {amount_hex!r} is not a hexadecimal byte")

    coord = s2sphere.CellId(cell_id).to_lat_lng()
    return GlobInfo(
        lat=coord.lat().degrees,
        lng=coord.lng().degrees,
        amount=int(amount_hex, 16),
        cell_id=cell_id,
    )
