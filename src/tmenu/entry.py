"""Discovered executables and the intrusive list that holds them.

An :class:`Entry` carries its own ``prev``/``next`` links, so moving it
between the visible and hidden lists is pure link surgery: nothing is copied
or reallocated while the user types. Each entry is a member of at most one
:class:`EntryList` at a time, and only ``EntryList`` methods touch the links.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from typing import TextIO

from tmenu.allocator import Allocator
from tmenu.common.errors import AllocationError, EntryListError

SEPARATOR = "/"


class Entry:
    """One discovered executable: full path plus display name."""

    __slots__ = ("_path", "_name", "_block", "rank", "prev", "next")

    def __init__(self, path: str, block: bytearray):
        self._path = path
        self._name = path.rsplit(SEPARATOR, 1)[-1]
        self._block = block
        # Position in discovery order, stamped by FilterSession.
        self.rank = 0
        self.prev: Entry | None = None
        self.next: Entry | None = None

    @classmethod
    def create(cls, allocator: Allocator, path: str) -> Entry:
        """Allocate storage for ``path`` and build an unlinked entry.

        The block is sized from the encoded path plus a terminator byte, so
        the copy always fits.

        Raises:
            AllocationError: If the allocator returns no block
        """
        raw = os.fsencode(path)
        block = allocator.allocate(len(raw) + 1)
        if block is None:
            raise AllocationError(f"Failed to allocate memory for entry: {path}")
        block[: len(raw)] = raw
        return cls(path, block)

    @property
    def path(self) -> str:
        return self._path

    @property
    def name(self) -> str:
        return self._name

    @property
    def linked(self) -> bool:
        return self.prev is not None or self.next is not None

    def destroy(self, allocator: Allocator) -> None:
        """Release this entry's storage. The entry must already be unlinked."""
        if self.linked:
            raise EntryListError(f"Cannot destroy linked entry {self._name!r}")
        allocator.release(self._block)
        self._block = None

    def __repr__(self) -> str:
        return f"Entry(name={self._name!r}, path={self._path!r})"


class EntryList:
    """Order-preserving doubly linked list of entries.

    ``head`` and ``tail`` are both None exactly when ``length`` is 0.
    """

    __slots__ = ("head", "tail", "length")

    def __init__(self):
        self.head: Entry | None = None
        self.tail: Entry | None = None
        self.length = 0

    def append(self, entry: Entry) -> None:
        """Link ``entry`` at the tail in O(1). No uniqueness check."""
        if entry.linked or entry is self.head:
            raise EntryListError(f"Entry {entry.name!r} already belongs to a list")
        entry.prev = self.tail
        entry.next = None
        if self.tail is None:
            self.head = entry
        else:
            self.tail.next = entry
        self.tail = entry
        self.length += 1

    def append_unique(self, entry: Entry) -> bool:
        """Append ``entry`` unless an entry with the same name is present.

        Returns:
            False if the name was already taken. The list is unchanged and
            the caller still owns ``entry``.
        """
        name = entry.name
        for existing in self:
            if len(existing.name) == len(name) and existing.name == name:
                return False
        self.append(entry)
        return True

    def remove(self, entry: Entry) -> None:
        """Detach ``entry`` from this list in O(1) and clear its links.

        The caller guarantees membership; an entry that visibly sits at no
        boundary of this list while lacking the matching link is rejected.
        """
        prev, nxt = entry.prev, entry.next
        if (prev is None and entry is not self.head) or (nxt is None and entry is not self.tail):
            raise EntryListError(f"Entry {entry.name!r} is not a member of this list")

        if prev is None:
            self.head = nxt
        else:
            prev.next = nxt
        if nxt is None:
            self.tail = prev
        else:
            nxt.prev = prev

        entry.prev = None
        entry.next = None
        self.length -= 1

    def extend(self, other: EntryList) -> None:
        """Splice all of ``other`` onto the tail in O(1).

        ``other`` still points at the moved chain afterwards; call
        ``other.clear()`` before reusing it.
        """
        if other.head is None:
            return
        if self.tail is None:
            self.head = other.head
        else:
            self.tail.next = other.head
            other.head.prev = self.tail
        self.tail = other.tail
        self.length += other.length

    def sort(self, key: Callable[[Entry], int]) -> None:
        """Relink the members in stable ``key`` order. Entries are not copied."""
        nodes = sorted(self, key=key)
        prev = None
        for node in nodes:
            node.prev = prev
            if prev is not None:
                prev.next = node
            prev = node
        if prev is not None:
            prev.next = None
        self.head = nodes[0] if nodes else None
        self.tail = prev

    def filter(self, out: EntryList, query: str) -> None:
        """Move every entry whose name lacks ``query`` into ``out``.

        Matching is case-sensitive substring containment. Both lists keep
        their relative order; moved entries land after whatever ``out``
        already held. An empty query moves nothing.
        """
        if not query:
            return
        entry = self.head
        while entry is not None:
            nxt = entry.next
            if query not in entry.name:
                self.remove(entry)
                out.append(entry)
            entry = nxt

    def destroy(self, allocator: Allocator) -> None:
        """Release every member entry and empty the list."""
        entry = self.head
        while entry is not None:
            nxt = entry.next
            entry.prev = None
            entry.next = None
            entry.destroy(allocator)
            entry = nxt
        self.clear()

    def clear(self) -> None:
        """Forget the members without releasing them."""
        self.head = None
        self.tail = None
        self.length = 0

    def find(self, name: str) -> Entry | None:
        for entry in self:
            if entry.name == name:
                return entry
        return None

    def names(self) -> list[str]:
        return [entry.name for entry in self]

    def items(self) -> list[tuple[str, str]]:
        """Return ``(name, path)`` pairs from head to tail."""
        return [(entry.name, entry.path) for entry in self]

    def dump(self, stream: TextIO | None = None) -> None:
        """Print one name per line."""
        stream = stream or sys.stdout
        for entry in self:
            print(entry.name, file=stream)

    def __iter__(self) -> Iterator[Entry]:
        entry = self.head
        while entry is not None:
            # Read the link first so callers may unlink the yielded entry.
            nxt = entry.next
            yield entry
            entry = nxt

    def __len__(self) -> int:
        return self.length

    def __bool__(self) -> bool:
        return self.head is not None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def __repr__(self) -> str:
        return f"EntryList({self.names()!r})"
