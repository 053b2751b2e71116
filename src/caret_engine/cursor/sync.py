"""Read-only snapshots handed to rendering hosts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from .position import Position


@dataclass(frozen=True, slots=True)
class SelectionSpan:
    """Selected columns ``[start, end)`` on one line.

    ``includes_break`` is set when the selection continues onto the next
    line, so a renderer can mark the line ending as selected too.
    """

    line: int
    start: int
    end: int
    includes_break: bool = False


@dataclass(frozen=True, slots=True)
class CursorMirror:
    """Host-friendly snapshot describing the current cursor state."""

    lines: tuple[str, ...]
    anchor: Position
    extent: Position
    spans: tuple[SelectionSpan, ...] = ()

    @property
    def has_selection(self) -> bool:
        return self.anchor != self.extent

    @property
    def caret(self) -> Position:
        return self.extent

    def text(self, separator: str = "\n") -> str:
        return separator.join(self.lines)

    def spans_for_line(self, line: int) -> tuple[SelectionSpan, ...]:
        return tuple(span for span in self.spans if span.line == line)


def selection_spans(
    lines: Sequence[str], anchor: Position, extent: Position
) -> tuple[SelectionSpan, ...]:
    """Split the anchor/extent range into one span per touched line."""

    if anchor == extent:
        return ()
    lower, upper = (extent, anchor) if extent < anchor else (anchor, extent)
    if lower.line == upper.line:
        return (SelectionSpan(lower.line, lower.column, upper.column),)

    spans = [
        SelectionSpan(lower.line, lower.column, len(lines[lower.line]), True)
    ]
    for index in range(lower.line + 1, upper.line):
        spans.append(SelectionSpan(index, 0, len(lines[index]), True))
    spans.append(SelectionSpan(upper.line, 0, upper.column))
    return tuple(spans)


class CursorSync(Protocol):
    """How adapters exchange state with a cursor."""

    def pull_cursor(self) -> CursorMirror:
        """Return the latest snapshot the host should render."""
        ...

    def push_host_edit(self, text: str) -> None:
        """Submit text that arrived outside key handling (paste, IME commit)."""
        ...


__all__ = ["CursorMirror", "CursorSync", "SelectionSpan", "selection_spans"]
