"""Authoring text engine: markdown-aware keystrokes and block rendering."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "interpreter",
    "keymaps",
    "render",
    "runtime",
    "session",
    "storage",
]

__version__ = "0.1.0"
