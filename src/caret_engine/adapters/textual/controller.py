"""Textual-facing controller that maps key events onto a Cursor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from caret_engine.actions import ActionResult
from caret_engine.cursor import Cursor, CursorMirror
from caret_engine.keymaps import KeymapRegistry, KeyStroke, load_default_keymaps
from caret_engine.runtime.telemetry import record_event

INSERT_ACTION_ID = "cursor.insert"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_cursor: Callable[[CursorMirror], None]
    update_status: Callable[[str], None] = _noop
    # Returns a status line to show, or None to keep the action's status.
    request_save: Callable[[CursorMirror], Optional[str]] = _noop
    log: Callable[[str], None] = _noop


class TextualCursorAdapter:
    """Bridges Textual key events to cursor operations and back to widgets."""

    def __init__(
        self,
        cursor: Cursor,
        hooks: TextualUIHooks,
        *,
        registry: Optional[KeymapRegistry] = None,
    ) -> None:
        self.cursor = cursor
        self.hooks = hooks
        self.registry = registry or load_default_keymaps(KeymapRegistry())
        self._refresh_cursor()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ActionResult:
        """Resolve ``key`` through the keymap, falling back to typed text."""

        stroke = KeyStroke.parse(key, text=text)
        if modifiers:
            stroke = KeyStroke(
                stroke.key, stroke.modifiers + tuple(modifiers), text=text
            )
        self._log_state("key ->", key=stroke.token, text=text)

        binding = self.registry.lookup(stroke)
        if binding is not None:
            action_id = binding.action_id
        elif _is_typed_text(stroke):
            action_id = INSERT_ACTION_ID
        else:
            result = ActionResult(consumed=False, status="unbound")
            self._log_state("result <-", status=result.status)
            return result

        action = self.registry.get_action(action_id)
        result = action(self.cursor, stroke)
        if not isinstance(result, ActionResult):
            raise TypeError(f"Action '{action_id}' returned {type(result).__name__}")
        self._after_action(action_id, result)
        return result

    def pull_cursor(self) -> CursorMirror:
        return self.cursor.mirror()

    def push_host_edit(self, text: str) -> None:
        if not text:
            return
        self.cursor.insert_text(text)
        record_event("adapter.host_edit", data={"length": len(text)})
        self._refresh_cursor()

    def _after_action(self, action_id: str, result: ActionResult) -> None:
        status = result.message or result.status
        if result.request == "save":
            saved = self.hooks.request_save(self.cursor.mirror())
            if saved:
                status = saved
        if status:
            self.hooks.update_status(status)
        self._refresh_cursor()
        self._log_state(
            "result <-",
            action=action_id,
            consumed=result.consumed,
            status=result.status,
            request=result.request,
        )

    def _refresh_cursor(self) -> None:
        self.hooks.update_cursor(self.cursor.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "cursor": self.cursor.name,
            "anchor": self.cursor.anchor.key,
            "extent": self.cursor.extent.key,
            "lines": self.cursor.line_count,
        }


def _is_typed_text(stroke: KeyStroke) -> bool:
    if not stroke.text or "ctrl" in stroke.modifiers or "alt" in stroke.modifiers:
        return False
    return stroke.text.isprintable()


__all__ = ["TextualCursorAdapter", "TextualUIHooks"]
