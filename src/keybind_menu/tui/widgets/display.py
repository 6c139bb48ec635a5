"""
Display widgets for the keybind list.
"""

import urwid

from ...models import KeybindEntry

HIGHLIGHT_INDICATOR = "▶ "
PLAIN_INDICATOR = "  "


def make_desc_line(desc: str, width: int) -> str:
    """
    Centre a description between runs of dashes filling width columns.

    Falls back to the bare description when there is no room for at least
    one dash on each side.
    """
    trimmed = desc.strip()
    if width <= 0 or width < len(trimmed) + 4:
        return trimmed
    dash_total = width - len(trimmed) - 2
    left = dash_total // 2
    right = dash_total - left
    return f"{'-' * left} {trimmed} {'-' * right}"


class DescriptionLine(urwid.Widget):
    """One-row flow widget laying out a description to the render width."""

    _sizing = frozenset([urwid.FLOW])

    def __init__(self, desc):
        super().__init__()
        self.desc = desc

    def rows(self, size, focus=False):
        return 1

    def render(self, size, focus=False):
        (maxcol,) = size
        text = urwid.Text(('description', make_desc_line(self.desc, maxcol)), wrap='clip')
        return text.render(size, focus)


class KeybindRow(urwid.WidgetWrap):
    """A keybind entry: key combination and name, description, spacer."""

    def __init__(self, entry: KeybindEntry, highlighted=False):
        self.entry = entry
        self.highlighted = highlighted
        super().__init__(self._build_widget())

    def _build_widget(self):
        indicator = (
            ('indicator', HIGHLIGHT_INDICATOR) if self.highlighted else PLAIN_INDICATOR
        )
        header = urwid.Columns([
            ('pack', urwid.Text([indicator, ('keys', f"{self.entry.keys} ")], wrap='clip')),
            urwid.Text(('name', self.entry.name), align='right', wrap='clip'),
        ])
        lines = [header]
        if self.entry.desc:
            lines.append(DescriptionLine(self.entry.desc))
        lines.append(urwid.Divider())
        return urwid.AttrMap(urwid.Pile(lines), 'highlight' if self.highlighted else None)

    def set_highlighted(self, highlighted):
        if highlighted == self.highlighted:
            return
        self.highlighted = highlighted
        self._w = self._build_widget()

    def selectable(self):
        return False
