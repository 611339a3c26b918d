"""Incremental substring filtering over a discovered entry list."""

from __future__ import annotations

import logging

from tmenu.allocator import Allocator
from tmenu.entry import Entry, EntryList

logger = logging.getLogger(__name__)


def _discovery_rank(entry: Entry) -> int:
    return entry.rank


class FilterSession:
    """Visible/hidden partition of the discovered entries plus the current query.

    Together the two lists always hold exactly the discovered entries, each
    in one list only. Typing narrows the visible list in place; deleting
    characters splices the hidden list back and filters again from scratch.
    """

    def __init__(self, entries: EntryList):
        for rank, entry in enumerate(entries):
            entry.rank = rank
        self.visible = entries
        self.hidden = EntryList()
        self.query = ""

    @property
    def total(self) -> int:
        return len(self.visible) + len(self.hidden)

    def narrow(self, query: str) -> None:
        """Apply a query that extends the current one."""
        self.visible.filter(self.hidden, query)
        self.query = query

    def relax(self, query: str) -> None:
        """Restore every hidden entry in discovery order, then filter with ``query``."""
        self.visible.extend(self.hidden)
        self.hidden.clear()
        self.visible.sort(key=_discovery_rank)
        self.visible.filter(self.hidden, query)
        self.query = query

    def set_query(self, query: str) -> None:
        if query == self.query:
            return
        if query.startswith(self.query):
            self.narrow(query)
        else:
            self.relax(query)
        logger.debug(f"Query {query!r}: {len(self.visible)}/{self.total} visible")

    def push(self, text: str) -> None:
        self.set_query(self.query + text)

    def backspace(self, count: int = 1) -> None:
        if count <= 0 or not self.query:
            return
        self.set_query(self.query[:-count])

    def reset(self) -> None:
        self.set_query("")

    def first(self) -> Entry | None:
        return self.visible.head

    def matches(self) -> list[tuple[str, str]]:
        """Visible ``(name, path)`` pairs in display order."""
        return self.visible.items()

    def destroy(self, allocator: Allocator) -> None:
        """Release every entry, visible or hidden."""
        self.visible.extend(self.hidden)
        self.hidden.clear()
        self.visible.destroy(allocator)
        self.query = ""
