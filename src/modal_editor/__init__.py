"""Modal terminal text editor: line store, motions, modes, commands and rendering."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "config",
    "keymaps",
    "modes",
    "motions",
    "render",
    "runtime",
    "storage",
]

__version__ = "0.1.0"
