"""Built-in keymap: arrows, Home/End, editing keys and a few Ctrl chords."""

from __future__ import annotations

from typing import Iterable

from caret_engine.actions import editing as editing_actions
from caret_engine.actions import navigation as navigation_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="cursor.move_left",
        handler=navigation_actions.move_left,
        description="Move left, wrapping to the previous line",
    ),
    ActionRef(
        id="cursor.move_right",
        handler=navigation_actions.move_right,
        description="Move right, wrapping to the next line",
    ),
    ActionRef(
        id="cursor.move_up",
        handler=navigation_actions.move_up,
        description="Move up one line keeping the remembered column",
    ),
    ActionRef(
        id="cursor.move_down",
        handler=navigation_actions.move_down,
        description="Move down one line keeping the remembered column",
    ),
    ActionRef(
        id="cursor.home",
        handler=navigation_actions.move_home,
        description="Toggle between line start and the remembered column",
    ),
    ActionRef(
        id="cursor.end",
        handler=navigation_actions.move_end,
        description="Toggle between line end and the remembered column",
    ),
    ActionRef(
        id="cursor.extend_left",
        handler=navigation_actions.extend_left,
        description="Extend selection left",
    ),
    ActionRef(
        id="cursor.extend_right",
        handler=navigation_actions.extend_right,
        description="Extend selection right",
    ),
    ActionRef(
        id="cursor.extend_up",
        handler=navigation_actions.extend_up,
        description="Extend selection up",
    ),
    ActionRef(
        id="cursor.extend_down",
        handler=navigation_actions.extend_down,
        description="Extend selection down",
    ),
    ActionRef(
        id="cursor.extend_home",
        handler=navigation_actions.extend_home,
        description="Extend selection to line start",
    ),
    ActionRef(
        id="cursor.extend_end",
        handler=navigation_actions.extend_end,
        description="Extend selection to line end",
    ),
    ActionRef(
        id="cursor.insert",
        handler=editing_actions.insert_character,
        description="Insert the typed text",
    ),
    ActionRef(
        id="cursor.insert_tab",
        handler=editing_actions.insert_tab,
        description="Insert a tab character",
    ),
    ActionRef(
        id="cursor.delete_forward",
        handler=editing_actions.delete_forward,
        description="Delete the character under the cursor or the selection",
    ),
    ActionRef(
        id="cursor.backspace",
        handler=editing_actions.backspace,
        description="Delete the character before the cursor or the selection",
    ),
    ActionRef(
        id="cursor.new_line",
        handler=editing_actions.new_line,
        description="Split the line at the cursor",
    ),
    ActionRef(
        id="cursor.select_all",
        handler=editing_actions.select_all,
        description="Select the whole buffer",
    ),
    ActionRef(
        id="host.save",
        handler=editing_actions.request_save,
        description="Ask the host to save the buffer",
    ),
)


DEFAULT_BINDINGS: tuple[tuple[str, str], ...] = (
    ("left", "cursor.move_left"),
    ("right", "cursor.move_right"),
    ("up", "cursor.move_up"),
    ("down", "cursor.move_down"),
    ("home", "cursor.home"),
    ("end", "cursor.end"),
    ("shift+left", "cursor.extend_left"),
    ("shift+right", "cursor.extend_right"),
    ("shift+up", "cursor.extend_up"),
    ("shift+down", "cursor.extend_down"),
    ("shift+home", "cursor.extend_home"),
    ("shift+end", "cursor.extend_end"),
    ("tab", "cursor.insert_tab"),
    ("delete", "cursor.delete_forward"),
    ("backspace", "cursor.backspace"),
    ("enter", "cursor.new_line"),
    ("ctrl+a", "cursor.select_all"),
    ("ctrl+s", "host.save"),
)


def _build_bindings(pairs: Iterable[tuple[str, str]]) -> list[Binding]:
    bindings = []
    for token, action_id in pairs:
        stroke = KeyStroke.parse(token)
        bindings.append(
            Binding(
                id=f"default.{stroke.token}",
                stroke=stroke,
                action_id=action_id,
                source="defaults",
            )
        )
    return bindings


def load_default_keymaps(
    registry: KeymapRegistry, *, replace: bool = False
) -> KeymapRegistry:
    """Register the built-in actions and bindings on ``registry``."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)
    for binding in _build_bindings(DEFAULT_BINDINGS):
        registry.register_binding(binding, replace=replace)
    return registry


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
