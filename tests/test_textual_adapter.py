from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from rich.style import Style
from rich.text import Text

from caret_engine.adapters.textual import (
    TextualCursorAdapter,
    TextualUIHooks,
    render_mirror,
)
from caret_engine.adapters.textual.render import CARET_STYLE, SELECTION_STYLE
from caret_engine.cursor import Cursor, CursorMirror, Position


@dataclass
class Recorder:
    mirrors: List[CursorMirror] = field(default_factory=list)
    statuses: List[str] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)
    saves: List[CursorMirror] = field(default_factory=list)

    def request_save(self, mirror: CursorMirror) -> Optional[str]:
        self.saves.append(mirror)
        return "saved"

    def hooks(self) -> TextualUIHooks:
        return TextualUIHooks(
            update_cursor=self.mirrors.append,
            update_status=self.statuses.append,
            request_save=self.request_save,
            log=self.logs.append,
        )


def make_adapter(*lines: str) -> tuple[TextualCursorAdapter, Recorder]:
    recorder = Recorder()
    adapter = TextualCursorAdapter(Cursor(list(lines)), recorder.hooks())
    return adapter, recorder


def test_adapter_pushes_initial_snapshot() -> None:
    _, recorder = make_adapter("abc")

    assert len(recorder.mirrors) == 1
    assert recorder.mirrors[0].lines == ("abc",)


def test_typed_characters_are_inserted() -> None:
    adapter, recorder = make_adapter()

    adapter.handle_textual_key("h", text="h")
    adapter.handle_textual_key("space", text=" ")
    adapter.handle_textual_key("i", text="i")

    assert adapter.cursor.lines == ("h i",)
    assert recorder.mirrors[-1].extent.key == (0, 3)
    assert recorder.statuses[-1] == "insert"


def test_bound_keys_drive_selection_and_editing() -> None:
    adapter, _ = make_adapter("hello", "world")

    adapter.handle_textual_key("end")
    adapter.handle_textual_key("shift+left")
    adapter.handle_textual_key("shift+left")
    assert adapter.pull_cursor().has_selection

    adapter.handle_textual_key("backspace")
    assert adapter.cursor.lines == ("hel", "world")

    adapter.handle_textual_key("enter")
    assert adapter.cursor.lines == ("hel", "", "world")
    assert adapter.cursor.extent.key == (1, 0)


def test_modifiers_can_be_passed_separately() -> None:
    adapter, _ = make_adapter("abc")

    adapter.handle_textual_key("right", modifiers=("shift",))

    assert adapter.cursor.anchor.key == (0, 0)
    assert adapter.cursor.extent.key == (0, 1)


def test_select_all_then_type_replaces_buffer() -> None:
    adapter, _ = make_adapter("one", "two")

    adapter.handle_textual_key("ctrl+a")
    adapter.handle_textual_key("x", text="x")

    assert adapter.cursor.lines == ("x",)


def test_unbound_and_control_keys_are_not_consumed() -> None:
    adapter, _ = make_adapter("abc")

    unbound = adapter.handle_textual_key("f5")
    control = adapter.handle_textual_key("ctrl+x", text="\x18")

    assert unbound.consumed is False
    assert unbound.status == "unbound"
    assert control.consumed is False
    assert adapter.cursor.lines == ("abc",)


def test_navigation_at_boundary_reports_noop() -> None:
    adapter, _ = make_adapter("abc")

    result = adapter.handle_textual_key("left")

    assert result.consumed is True
    assert result.status == "noop"


def test_save_request_is_forwarded_to_host() -> None:
    adapter, recorder = make_adapter("abc")

    result = adapter.handle_textual_key("ctrl+s")

    assert result.request == "save"
    assert [mirror.lines for mirror in recorder.saves] == [("abc",)]
    assert recorder.statuses[-1] == "saved"


def test_host_edit_inserts_text_and_refreshes() -> None:
    adapter, recorder = make_adapter("ab")

    adapter.push_host_edit("x\ny")
    adapter.push_host_edit("")

    assert adapter.cursor.lines == ("x", "yab")
    assert len(recorder.mirrors) == 2
    assert recorder.mirrors[-1].extent.key == (1, 1)


def test_adapter_emits_log_lines() -> None:
    adapter, recorder = make_adapter("abc")

    adapter.handle_textual_key("right")

    assert any(line.startswith("key ->") for line in recorder.logs)
    assert any("action='cursor.move_right'" in line for line in recorder.logs)


def _has_span(text: Text, start: int, end: int, style: Style) -> bool:
    return any(
        span.start == start and span.end == end and span.style == style
        for span in text.spans
    )


def test_render_draws_caret_on_character() -> None:
    rendered = render_mirror(Cursor(["ab", "cd"]).mirror())

    assert rendered.plain == "ab\ncd"
    assert _has_span(rendered, 0, 1, CARET_STYLE)


def test_render_appends_caret_cell_at_end_of_line() -> None:
    cursor = Cursor(["ab", "cd"], anchor=Position(1, 2))

    rendered = render_mirror(cursor.mirror())

    assert rendered.plain == "ab\ncd "
    assert _has_span(rendered, 5, 6, CARET_STYLE)


def test_render_highlights_cross_line_selection() -> None:
    cursor = Cursor(["ab", "cd"], anchor=Position(0, 1), extent=Position(1, 1))

    rendered = render_mirror(cursor.mirror())

    assert rendered.plain == "ab \ncd"
    assert _has_span(rendered, 1, 2, SELECTION_STYLE)
    assert _has_span(rendered, 2, 3, SELECTION_STYLE)
    assert _has_span(rendered, 4, 5, SELECTION_STYLE)
    assert _has_span(rendered, 5, 6, CARET_STYLE)
