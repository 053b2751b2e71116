"""Which end of the selection moves, and how a destination is written back.

Every navigation operation runs in three steps: pick the moving position,
compute a destination from it, then write the destination back. The first
and last step are identical for all operations and live here.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from .position import Position

if TYPE_CHECKING:  # pragma: no cover
    from .cursor import Cursor


class MovingRole(str, Enum):
    ANCHOR = "anchor"
    EXTENT = "extent"


def resolve_moving_role(cursor: "Cursor", extend: bool) -> MovingRole:
    # Starting a selection reads the anchor; the two are equal at that point,
    # only their column memories can differ.
    if not extend or cursor.has_selection:
        return MovingRole.EXTENT
    return MovingRole.ANCHOR


def resolve_moving_position(cursor: "Cursor", extend: bool) -> Position:
    """Return the position a navigation should start from."""

    role = resolve_moving_role(cursor, extend)
    return cursor.extent if role is MovingRole.EXTENT else cursor.anchor


def write_back(cursor: "Cursor", destination: Position, extend: bool) -> None:
    """Store ``destination`` in the extent, and in the anchor unless extending."""

    cursor._extent = destination
    if not extend:
        cursor._anchor = destination


__all__ = [
    "MovingRole",
    "resolve_moving_position",
    "resolve_moving_role",
    "write_back",
]
