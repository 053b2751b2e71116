"""Result type shared by every key-bound action."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class ActionResult:
    """Outcome of running an action against a cursor.

    ``request`` names work the host must do outside the engine, such as
    ``"save"``.
    """

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    request: Optional[str] = None


__all__ = ["ActionResult"]
