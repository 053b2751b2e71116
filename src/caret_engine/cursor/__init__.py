"""Cursor engine: positions, navigation and editing over a list of lines."""

from .cursor import Cursor
from .position import Position
from .roles import MovingRole, resolve_moving_position, resolve_moving_role, write_back
from .sync import CursorMirror, CursorSync, SelectionSpan, selection_spans
from .validation import (
    CursorValidationError,
    check_invariants,
    ensure_lines,
    ensure_position,
)

__all__ = [
    "Cursor",
    "Position",
    "MovingRole",
    "resolve_moving_position",
    "resolve_moving_role",
    "write_back",
    "CursorMirror",
    "CursorSync",
    "SelectionSpan",
    "selection_spans",
    "CursorValidationError",
    "check_invariants",
    "ensure_lines",
    "ensure_position",
]
