"""Validation helpers guarding the cursor invariants."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .position import Position


class CursorValidationError(RuntimeError):
    """Raised when a caller hands the engine out-of-bounds state."""

    def __init__(self, message: str, *, position: Position | None = None) -> None:
        super().__init__(message)
        self.position = position


def ensure_lines(lines: Iterable[str] | None) -> List[str]:
    """Copy ``lines`` into a fresh list, substituting one empty line if empty."""

    if lines is None:
        return [""]
    if isinstance(lines, str):
        raise CursorValidationError("Lines must be a sequence of strings, not a str")
    copied = list(lines)
    for index, line in enumerate(copied):
        if not isinstance(line, str):
            raise CursorValidationError(f"Line {index} is not a string")
        if "\n" in line:
            raise CursorValidationError(f"Line {index} contains a line separator")
    return copied or [""]


def ensure_position(lines: Sequence[str], position: Position) -> Position:
    if position.line < 0 or position.line >= len(lines):
        raise CursorValidationError("Line out of range", position=position)
    if position.column < 0 or position.column > len(lines[position.line]):
        raise CursorValidationError("Column out of range", position=position)
    if position.column_memory < 0:
        raise CursorValidationError("Negative column memory", position=position)
    return position


def check_invariants(lines: Sequence[str], anchor: Position, extent: Position) -> None:
    if not lines:
        raise CursorValidationError("Cursor buffer has no lines")
    ensure_position(lines, anchor)
    ensure_position(lines, extent)


__all__ = [
    "CursorValidationError",
    "check_invariants",
    "ensure_lines",
    "ensure_position",
]
