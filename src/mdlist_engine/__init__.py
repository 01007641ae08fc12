"""UI-agnostic Markdown list continuation and renumbering engine."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "config",
    "dispatch",
    "host",
    "keymaps",
    "listedit",
    "runtime",
]

__version__ = "0.1.0"
