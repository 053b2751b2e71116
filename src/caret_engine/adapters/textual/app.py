"""Executable Textual app that edits one file with the cursor engine."""

from __future__ import annotations

import argparse
import codecs
import os
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import VerticalScroll
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use caret_engine.adapters.textual.app"
    ) from exc

from caret_engine.cursor import Cursor, CursorMirror
from caret_engine.runtime import telemetry
from caret_engine.storage import (
    LineStorageError,
    default_separator,
    load_cursor,
    save_cursor,
)

from .controller import TextualCursorAdapter, TextualUIHooks
from .render import render_mirror


class CaretEditorApp(App[None]):
    """Minimal Textual UI around a single Cursor."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-area {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        path: Path,
        *,
        separator: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> None:
        super().__init__()
        self.path = path
        self.separator = separator if separator is not None else default_separator()
        self.encoding = encoding
        self.adapter: TextualCursorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._load_failed = False

    def compose(self) -> ComposeResult:
        yield Header()
        with VerticalScroll(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.path.name
        cursor, status = self._open_cursor()
        hooks = TextualUIHooks(
            update_cursor=self._update_cursor,
            update_status=self._update_status,
            request_save=self._save,
        )
        self.adapter = TextualCursorAdapter(cursor, hooks)
        self._update_status(status)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        result = self.adapter.handle_textual_key(event.key, text=event.character)
        if result.consumed:
            event.stop()
            event.prevent_default()

    def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.push_host_edit(event.text)

    def _open_cursor(self) -> tuple[Cursor, str]:
        if not self.path.exists():
            return Cursor(name=self.path.name), f"New file {self.path}"
        try:
            cursor = load_cursor(
                self.path, separator=self.separator, encoding=self.encoding
            )
        except LineStorageError as exc:
            self._load_failed = True
            return Cursor(name=self.path.name), str(exc)
        return cursor, f"Opened {self.path} ({cursor.line_count} lines)"

    def _update_cursor(self, mirror: CursorMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _save(self, mirror: CursorMirror) -> Optional[str]:
        if not self.adapter:
            return None
        if self._load_failed:
            return f"Not saving over {self.path}: it failed to load"
        try:
            save_cursor(
                self.adapter.cursor,
                self.path,
                separator=self.separator,
                encoding=self.encoding,
            )
        except LineStorageError as exc:
            return str(exc)
        return f"Saved {self.path} ({len(mirror.lines)} lines)"


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a text file with caret_engine.")
    parser.add_argument("path", type=Path, help="File to open (created on save)")
    parser.add_argument(
        "--separator",
        default=os.environ.get("CARET_ENGINE_LINE_SEPARATOR"),
        help=r"Line separator, escapes allowed (default: \n)",
    )
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Text encoding used for load and save (default: utf-8)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    # Console log lines would be drawn over the Textual screen.
    telemetry.configure(console=False)
    separator = None
    if args.separator:
        separator = codecs.decode(args.separator, "unicode_escape")
    app = CaretEditorApp(args.path, separator=separator, encoding=args.encoding)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
