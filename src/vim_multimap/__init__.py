"""Expand multi-mode Vim map and menu declarations into primitive commands."""

__all__ = [
    "cli",
    "config",
    "directives",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
