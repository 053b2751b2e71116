"""Textual host adapter: key handling, rendering and a demo app.

``app`` is not imported here so the controller and renderer stay usable
without starting a Textual application.
"""

from .controller import TextualCursorAdapter, TextualUIHooks
from .render import render_mirror

__all__ = ["TextualCursorAdapter", "TextualUIHooks", "render_mirror"]
