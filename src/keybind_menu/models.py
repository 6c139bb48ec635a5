"""
Data records shared by the query engine and the display controller.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeybindEntry:
    """A single keybinding as loaded from configuration."""
    keys: str
    name: str
    desc: str


@dataclass
class QueryState:
    """In-progress search text and caret position within it."""
    text: str = ""
    cursor_index: int = 0


@dataclass
class SelectionState:
    """
    Highlighted row in the filtered view.

    The index is always within [0, count) for the view it was last clamped
    against, and 0 when that view is empty.
    """
    highlighted_index: int = 0

    def reset(self):
        self.highlighted_index = 0

    def clamp(self, count: int) -> int:
        if count <= 0:
            self.highlighted_index = 0
        else:
            self.highlighted_index = max(0, min(self.highlighted_index, count - 1))
        return self.highlighted_index

    def move(self, delta: int, count: int) -> int:
        """Move by delta rows and clamp to the view size."""
        self.highlighted_index += delta
        return self.clamp(count)
