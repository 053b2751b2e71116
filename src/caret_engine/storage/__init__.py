"""File I/O collaborator: lines to text and back."""

from .lines import (
    LineStorageError,
    default_separator,
    join_lines,
    load_cursor,
    save_cursor,
    split_lines,
)

__all__ = [
    "LineStorageError",
    "default_separator",
    "join_lines",
    "load_cursor",
    "save_cursor",
    "split_lines",
]
