"""UI-agnostic single-selection text cursor engine."""

__all__ = [
    "actions",
    "adapters",
    "cursor",
    "keymaps",
    "runtime",
    "storage",
]

__version__ = "0.1.0"
