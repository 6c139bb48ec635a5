"""
Search input widget for the keybind menu TUI.
"""

import urwid
import logging

from ..key_bindings import INPUT_PASSTHROUGH_KEYS

logger = logging.getLogger('KeybindMenu.TUI')


class SearchEdit(urwid.Edit):
    """Single-line query editor that shows placeholder text while empty."""

    def __init__(self, caption="", edit_text="", placeholder_text="", **kwargs):
        super().__init__(caption, edit_text, **kwargs)
        self.placeholder_text = placeholder_text

    def render(self, size, focus=False):
        if not self.edit_text and self.placeholder_text:
            placeholder = urwid.Text(
                [('placeholder_text', f"{self.caption}{self.placeholder_text}")],
                wrap='clip'
            )
            return placeholder.render(size, focus)
        return super().render(size, focus)

    def rows(self, size, focus=False):
        if not self.edit_text and self.placeholder_text:
            return 1
        return super().rows(size, focus)

    def keypress(self, size, key):
        """Hand navigation and quit keys to the app; edit on everything else."""
        if key in INPUT_PASSTHROUGH_KEYS:
            return key
        return super().keypress(size, key)
