"""Line-sequence serialization and file load/save for cursors."""

from __future__ import annotations

import codecs
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Union

from caret_engine.cursor import Cursor, CursorValidationError
from caret_engine.runtime.telemetry import record_event, span

PathLike = Union[str, "os.PathLike[str]"]

ENV_SEPARATOR = "CARET_ENGINE_LINE_SEPARATOR"


class LineStorageError(OSError):
    """Raised when a buffer cannot be read from or written to disk."""

    def __init__(self, message: str, *, path: PathLike) -> None:
        super().__init__(message)
        self.path = Path(path)


def default_separator() -> str:
    """Separator from ``CARET_ENGINE_LINE_SEPARATOR``; escapes like ``\\r\\n`` allowed."""

    raw = os.getenv(ENV_SEPARATOR)
    if not raw:
        return "\n"
    decoded = codecs.decode(raw, "unicode_escape")
    if not decoded:
        raise ValueError(f"{ENV_SEPARATOR} must not be empty")
    return decoded


def split_lines(text: str, separator: Optional[str] = None) -> List[str]:
    """Split ``text`` on ``separator``; the empty string yields one empty line."""

    sep = separator if separator is not None else default_separator()
    if not sep:
        raise ValueError("separator must not be empty")
    return text.split(sep)


def join_lines(lines: Iterable[str], separator: Optional[str] = None) -> str:
    sep = separator if separator is not None else default_separator()
    if not sep:
        raise ValueError("separator must not be empty")
    return sep.join(lines)


def load_cursor(
    path: PathLike,
    *,
    separator: Optional[str] = None,
    encoding: str = "utf-8",
    name: Optional[str] = None,
) -> Cursor:
    """Read ``path`` into a new cursor positioned at the document start."""

    target = Path(path)
    with span(
        "storage::load", component="storage", metadata={"path": str(target)}
    ):
        try:
            with target.open(encoding=encoding, newline="") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise LineStorageError(f"Cannot read {target}: {exc}", path=target) from exc
        lines = split_lines(text, separator)
        try:
            cursor = Cursor(lines, name=name or target.name)
        except CursorValidationError as exc:
            # A line break other than the separator is left inside a line.
            raise LineStorageError(
                f"Cannot load {target}: {exc}", path=target
            ) from exc
        record_event(
            "storage.load", data={"path": str(target), "lines": len(lines)}
        )
        return cursor


def save_cursor(
    cursor: Cursor,
    path: PathLike,
    *,
    separator: Optional[str] = None,
    encoding: str = "utf-8",
) -> Path:
    """Write the cursor's lines to ``path`` through a temporary sibling file."""

    target = Path(path)
    content = join_lines(cursor.lines, separator)
    with span(
        "storage::save", component="storage", metadata={"path": str(target)}
    ) as handle:
        temp_name: Optional[str] = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding=encoding,
                newline="",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as temp_file:
                temp_name = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_name, target)
        except (OSError, UnicodeEncodeError) as exc:
            if temp_name is not None and os.path.exists(temp_name):
                os.remove(temp_name)
            handle.add_metadata("error", exc)
            raise LineStorageError(f"Cannot save {target}: {exc}", path=target) from exc
        record_event(
            "storage.save",
            data={"path": str(target), "lines": cursor.line_count},
        )
        return target


__all__ = [
    "LineStorageError",
    "default_separator",
    "join_lines",
    "load_cursor",
    "save_cursor",
    "split_lines",
]
