"""Actions that change buffer content or the whole selection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from caret_engine.cursor import Cursor

from .base import ActionResult

if TYPE_CHECKING:  # pragma: no cover
    from caret_engine.keymaps.models import KeyStroke


def insert_character(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    """Insert the text carried by ``stroke``; strokes without text are ignored."""

    if not stroke.text:
        return ActionResult(consumed=False, status="ignored")
    cursor.insert_text(stroke.text)
    return ActionResult(consumed=True, status="insert")


def insert_tab(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    cursor.insert("\t")
    return ActionResult(consumed=True, status="insert")


def delete_forward(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    cursor.delete_forward()
    return ActionResult(consumed=True, status="delete")


def backspace(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    cursor.backspace()
    return ActionResult(consumed=True, status="delete")


def new_line(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    cursor.new_line()
    return ActionResult(consumed=True, status="new_line")


def select_all(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    del stroke
    cursor.select_all()
    return ActionResult(consumed=True, status="select_all")


def request_save(cursor: Cursor, stroke: KeyStroke) -> ActionResult:
    # Writing files is the host's job; the engine only asks for it.
    del cursor, stroke
    return ActionResult(consumed=True, status="save", request="save")


__all__ = [
    "insert_character",
    "insert_tab",
    "delete_forward",
    "backspace",
    "new_line",
    "select_all",
    "request_save",
]
