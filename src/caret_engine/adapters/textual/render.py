"""Turn a CursorMirror into styled rich text."""

from __future__ import annotations

from rich.style import Style
from rich.text import Text

from caret_engine.cursor import CursorMirror

CARET_STYLE = Style(reverse=True)
SELECTION_STYLE = Style(bgcolor="dark_cyan")


def render_mirror(
    mirror: CursorMirror,
    *,
    caret_style: Style = CARET_STYLE,
    selection_style: Style = SELECTION_STYLE,
) -> Text:
    """Render every line, highlight the selection and draw the caret at the extent.

    The caret sits on the character after it, or on a trailing blank cell at
    the end of a line. Selected line breaks are also shown as a blank cell.
    """

    rendered = Text(no_wrap=True, end="")
    caret = mirror.caret
    for index, line in enumerate(mirror.lines):
        row = Text(line)
        trailing = False
        for selected in mirror.spans_for_line(index):
            if selected.end > selected.start:
                row.stylize(selection_style, selected.start, selected.end)
            trailing = trailing or selected.includes_break
        if trailing:
            row.append(" ", style=selection_style)
        if caret.line == index:
            if caret.column < len(line):
                row.stylize(caret_style, caret.column, caret.column + 1)
            elif trailing:
                row.stylize(caret_style, len(line), len(line) + 1)
            else:
                row.append(" ", style=caret_style)
        if index:
            rendered.append("\n")
        rendered.append_text(row)
    return rendered


__all__ = ["CARET_STYLE", "SELECTION_STYLE", "render_mirror"]
