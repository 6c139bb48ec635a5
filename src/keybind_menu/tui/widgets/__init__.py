"""
Reusable UI widgets for the keybind menu TUI.
"""

from .edit_widgets import SearchEdit
from .display import KeybindRow, DescriptionLine, make_desc_line

__all__ = [
    'SearchEdit',
    'KeybindRow',
    'DescriptionLine',
    'make_desc_line',
]
