"""Searchable terminal menu for desktop keybindings."""

__version__ = "0.1.0"
