"""
Query engine for the keybind menu.

Filtering is a plain case-insensitive substring test over the keys, name and
description of each entry. Matches keep their original order.
"""

import logging
from typing import Iterable, List, Sequence

from .models import KeybindEntry

logger = logging.getLogger('KeybindMenu.Query')


def entry_matches(entry: KeybindEntry, needle: str) -> bool:
    """Check an entry against an already lowercased needle."""
    return (
        needle in entry.keys.lower()
        or needle in entry.name.lower()
        or needle in entry.desc.lower()
    )


def filter_entries(entries: Iterable[KeybindEntry], query: str) -> List[KeybindEntry]:
    """
    Return the entries matching query, in their original order.

    An empty query matches everything. The query is used as typed; surrounding
    whitespace is part of the needle.
    """
    if not query:
        return list(entries)
    needle = query.lower()
    return [entry for entry in entries if entry_matches(entry, needle)]


class QueryEngine:
    """Owns the full entry list and the view for the current query."""

    def __init__(self, entries: Sequence[KeybindEntry]):
        self.entries = tuple(entries)
        self.query = ""
        self.view: List[KeybindEntry] = list(self.entries)

    def update_query(self, query: str) -> List[KeybindEntry]:
        """Recompute the view for a new query and return it."""
        self.query = query
        self.view = filter_entries(self.entries, query)
        logger.debug("Query %r matched %d of %d entries", query, len(self.view), len(self.entries))
        return self.view

    def __len__(self):
        return len(self.view)
