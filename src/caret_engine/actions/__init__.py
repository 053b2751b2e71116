"""Key-bound verbs that drive a Cursor."""

from .base import ActionResult
from .editing import (
    backspace,
    delete_forward,
    insert_character,
    insert_tab,
    new_line,
    request_save,
    select_all,
)
from .navigation import (
    extend_down,
    extend_end,
    extend_home,
    extend_left,
    extend_right,
    extend_up,
    move_down,
    move_end,
    move_home,
    move_left,
    move_right,
    move_up,
)

__all__ = [
    "ActionResult",
    "backspace",
    "delete_forward",
    "insert_character",
    "insert_tab",
    "new_line",
    "request_save",
    "select_all",
    "extend_down",
    "extend_end",
    "extend_home",
    "extend_left",
    "extend_right",
    "extend_up",
    "move_down",
    "move_end",
    "move_home",
    "move_left",
    "move_right",
    "move_up",
]
