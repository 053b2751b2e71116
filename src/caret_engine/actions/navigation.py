"""Arrow, Home and End actions, with and without selection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from caret_engine.cursor import Cursor

from .base import ActionResult

if TYPE_CHECKING:  # pragma: no cover
    from caret_engine.keymaps.models import KeyStroke


def _navigate(cursor: Cursor, method: str, extend: bool) -> ActionResult:
    before = (cursor.anchor, cursor.extent)
    getattr(cursor, method)(extend=extend)
    if (cursor.anchor, cursor.extent) == before:
        return ActionResult(consumed=True, status="noop")
    return ActionResult(consumed=True, status="extend" if extend else "move")


def move_left(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "move_left", False)


def move_right(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "move_right", False)


def move_up(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "move_up", False)


def move_down(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "move_down", False)


def move_home(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "home", False)


def move_end(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "end", False)


def extend_left(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "move_left", True)


def extend_right(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "move_right", True)


def extend_up(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "move_up", True)


def extend_down(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "move_down", True)


def extend_home(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "home", True)


def extend_end(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    return _navigate(cursor, "end", True)


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "move_home",
    "move_end",
    "extend_left",
    "extend_right",
    "extend_up",
    "extend_down",
    "extend_home",
    "extend_end",
]
