"""Single-selection cursor over a list-of-lines buffer."""

from __future__ import annotations

from typing import ContextManager, Iterable, List, Optional, Sequence

from caret_engine.runtime.telemetry import SpanHandle, record_event, span

from .position import Position
from .roles import resolve_moving_position, write_back
from .sync import CursorMirror, selection_spans
from .validation import check_invariants, ensure_lines, ensure_position


class Cursor:
    """Anchor/extent pair plus the lines they index into.

    Navigation methods take ``extend``: when true the anchor stays put and
    the selection grows or shrinks, otherwise both ends land on the
    destination. Editing methods replace an active selection first.
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        *,
        anchor: Optional[Position] = None,
        extent: Optional[Position] = None,
        name: str = "default",
    ) -> None:
        self.name = name
        self._lines: List[str] = ensure_lines(lines)
        self._anchor = anchor if anchor is not None else Position()
        self._extent = extent if extent is not None else self._anchor
        ensure_position(self._lines, self._anchor)
        ensure_position(self._lines, self._extent)

    @classmethod
    def from_text(
        cls, text: str, *, separator: str = "\n", name: str = "default"
    ) -> "Cursor":
        return cls(text.split(separator), name=name)

    # -- read surface -------------------------------------------------------

    @property
    def anchor(self) -> Position:
        return self._anchor

    @property
    def extent(self) -> Position:
        return self._extent

    @property
    def lines(self) -> Sequence[str]:
        return tuple(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_length(self, index: int) -> int:
        return len(self._lines[index])

    @property
    def has_selection(self) -> bool:
        return self._anchor != self._extent

    def selection_bounds(self) -> tuple[Position, Position]:
        """Return ``(lower, upper)`` in document order."""

        if self._extent < self._anchor:
            return self._extent, self._anchor
        return self._anchor, self._extent

    def selected_text(self, separator: str = "\n") -> str:
        if not self.has_selection:
            return ""
        lower, upper = self.selection_bounds()
        if lower.line == upper.line:
            return self._lines[lower.line][lower.column : upper.column]
        parts = [self._lines[lower.line][lower.column :]]
        parts.extend(self._lines[lower.line + 1 : upper.line])
        parts.append(self._lines[upper.line][: upper.column])
        return separator.join(parts)

    def text(self, separator: str = "\n") -> str:
        return separator.join(self._lines)

    def mirror(self) -> CursorMirror:
        return CursorMirror(
            lines=tuple(self._lines),
            anchor=self.anchor,
            extent=self.extent,
            spans=selection_spans(self._lines, self._anchor, self._extent),
        )

    # -- horizontal navigation ---------------------------------------------

    def move_left(self, extend: bool = False) -> None:
        start = resolve_moving_position(self, extend)
        if start.column > 0:
            destination = start.moved_to(start.line, start.column - 1)
        elif start.line > 0:
            previous = start.line - 1
            destination = start.moved_to(previous, self.line_length(previous))
        else:
            destination = start.moved_to(start.line, start.column)
        write_back(self, destination, extend)

    def move_right(self, extend: bool = False) -> None:
        start = resolve_moving_position(self, extend)
        max_column = self.line_length(start.line)
        if start.column < max_column:
            destination = start.moved_to(start.line, start.column + 1)
        elif start.line < len(self._lines) - 1:
            destination = start.moved_to(start.line + 1, 0)
        else:
            destination = start.moved_to(start.line, start.column)
        write_back(self, destination, extend)

    def home(self, extend: bool = False) -> None:
        """Jump to column 0, or back to the remembered column if already there."""

        start = resolve_moving_position(self, extend)
        length = self.line_length(start.line)
        if start.column == 0 and start.column_memory <= length:
            column = start.column_memory
        else:
            column = 0
        write_back(self, start.moved_to(start.line, column, remember=False), extend)

    def end(self, extend: bool = False) -> None:
        """Jump to the end of line, or back to the remembered column if already there."""

        start = resolve_moving_position(self, extend)
        length = self.line_length(start.line)
        if start.column == length and start.column_memory <= length:
            column = start.column_memory
        else:
            column = length
        write_back(self, start.moved_to(start.line, column, remember=False), extend)

    # -- vertical navigation -----------------------------------------------

    def move_up(self, extend: bool = False) -> None:
        self._move_vertically(-1, extend)

    def move_down(self, extend: bool = False) -> None:
        self._move_vertically(1, extend)

    def _move_vertically(self, direction: int, extend: bool) -> None:
        start = resolve_moving_position(self, extend)
        line = min(max(start.line + direction, 0), len(self._lines) - 1)
        max_column = self.line_length(line)
        column = start.column
        memory = start.column_memory
        if column > max_column:
            column = max_column
        elif column < memory and column < max_column:
            # A remembered column equal to the line length counts as fitting.
            column = max_column if memory > max_column else memory
        write_back(self, start.moved_to(line, column, remember=False), extend)

    # -- selection ----------------------------------------------------------

    def select_all(self) -> None:
        last = len(self._lines) - 1
        length = self.line_length(last)
        self._anchor = Position(0, 0, 0)
        self._extent = Position(last, length, length)
        record_event(
            "cursor.select_all",
            data={"cursor": self.name, "lines": len(self._lines)},
        )

    def delete_selection(self) -> None:
        if not self.has_selection:
            return
        with self._span("delete_selection"):
            self._delete_selection()
            self._validate()

    def _delete_selection(self) -> None:
        lower, upper = self.selection_bounds()
        if lower.line == upper.line:
            text = self._lines[lower.line]
            self._lines[lower.line] = text[: lower.column] + text[upper.column :]
        else:
            head = self._lines[lower.line][: lower.column]
            tail = self._lines[upper.line][upper.column :]
            self._lines[lower.line] = head + tail
            del self._lines[lower.line + 1 : upper.line + 1]
        collapsed = lower.moved_to(lower.line, lower.column)
        self._anchor = collapsed
        self._extent = collapsed

    # -- editing ------------------------------------------------------------

    def insert(self, character: str) -> None:
        """Insert one codepoint at the cursor, replacing any selection."""

        _check_character(character)
        with self._span("insert"):
            self._insert_character(character)
            self._validate()

    def insert_text(self, text: str) -> None:
        """Insert a whole string, turning any line break into a new line."""

        normalized = text.replace("\r\n", "\n").replace("\r", "\n")
        with self._span("insert_text") as handle:
            handle.add_metadata("length", len(normalized))
            for character in normalized:
                if character == "\n":
                    self._new_line()
                else:
                    self._insert_character(character)
            self._validate()

    def delete_forward(self) -> None:
        with self._span("delete_forward"):
            self._delete_forward()
            self._validate()

    def backspace(self) -> None:
        with self._span("backspace"):
            if self.has_selection:
                self._delete_selection()
            elif self._extent.key != (0, 0):
                self.move_left(extend=False)
                self._delete_forward()
            self._validate()

    def new_line(self) -> None:
        with self._span("new_line"):
            self._new_line()
            self._validate()

    def _insert_character(self, character: str) -> None:
        if self.has_selection:
            self._delete_selection()
        line, column = self._extent.key
        text = self._lines[line]
        self._lines[line] = text[:column] + character + text[column:]
        self.move_right(extend=False)

    def _delete_forward(self) -> None:
        if self.has_selection:
            self._delete_selection()
            return
        line, column = self._extent.key
        text = self._lines[line]
        if column < len(text):
            self._lines[line] = text[:column] + text[column + 1 :]
        elif line + 1 < len(self._lines):
            self._lines[line] = text + self._lines.pop(line + 1)

    def _new_line(self) -> None:
        if self.has_selection:
            self._delete_selection()
        line, column = self._extent.key
        text = self._lines[line]
        self._lines[line] = text[:column]
        self._lines.insert(line + 1, text[column:])
        self._anchor = Position(line + 1, 0, 0)
        self._extent = Position(line + 1, 0, 0)

    # -- internals ----------------------------------------------------------

    def _validate(self) -> None:
        check_invariants(self._lines, self._anchor, self._extent)

    def _span(self, operation: str) -> ContextManager[SpanHandle]:
        return span(
            f"cursor::{operation}",
            component="cursor",
            metadata={"cursor": self.name},
        )

    def __repr__(self) -> str:
        return (
            f"Cursor(name={self.name!r}, anchor={self._anchor.key}, "
            f"extent={self._extent.key}, lines={len(self._lines)})"
        )


def _check_character(character: str) -> None:
    if not isinstance(character, str) or len(character) != 1:
        raise ValueError("insert() takes exactly one character")
    if character in "\r\n":
        raise ValueError("Use new_line() to break lines")


__all__ = ["Cursor"]
