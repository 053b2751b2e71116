"""Position value type shared by the anchor and the extent."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A ``(line, column)`` pair plus the remembered horizontal column.

    ``column`` counts codepoints. ``column_memory`` is bookkeeping for
    vertical movement and takes no part in comparisons or hashing, so two
    positions on the same character are equal whatever column they remember.
    """

    line: int = 0
    column: int = 0
    column_memory: int = field(default=0, compare=False)

    @property
    def key(self) -> tuple[int, int]:
        return (self.line, self.column)

    def moved_to(
        self, line: int, column: int, *, remember: bool = True
    ) -> "Position":
        """Return a new position; ``remember`` also resets ``column_memory``."""

        memory = column if remember else self.column_memory
        return Position(line=line, column=column, column_memory=memory)


__all__ = ["Position"]
