"""Executable discovery over the colon-separated search path."""

from __future__ import annotations

import enum
import logging
import os
import stat

from tmenu.allocator import Allocator
from tmenu.common.config import DEFAULT_MAX_PATH
from tmenu.common.decorators import timing
from tmenu.common.errors import AllocationError, ConfigurationError
from tmenu.entry import SEPARATOR, Entry, EntryList

logger = logging.getLogger(__name__)

PATH_LIST_SEPARATOR = ":"


class ScanOrder(enum.Enum):
    """Order in which the children of one directory are visited.

    Directories themselves are always visited in search-path order.
    ``DESCENDING`` is the reference behaviour: a directory's executables
    show up reverse-alphabetically in the menu.
    """

    ASCENDING = "asc"
    DESCENDING = "desc"

    @classmethod
    def from_name(cls, name: str) -> ScanOrder:
        try:
            return cls(name.lower())
        except ValueError:
            raise ConfigurationError(f"Unknown scan order: {name!r} (expected asc or desc)") from None


def split_search_path(value: str | None) -> list[str]:
    """Split a search-path value into directories, left to right.

    Empty components are dropped.
    """
    if not value:
        return []
    return [token for token in value.split(PATH_LIST_SEPARATOR) if token]


def is_executable(path: str) -> bool:
    """Return True if ``path`` resolves to a regular file with the owner-execute bit.

    Symlinks are followed. Raises OSError if the target cannot be stat'ed.
    """
    mode = os.stat(path).st_mode
    return stat.S_ISREG(mode) and bool(mode & stat.S_IXUSR)


def _list_directory(directory: str, order: ScanOrder) -> list[os.DirEntry]:
    with os.scandir(directory) as it:
        children = sorted(it, key=lambda child: child.name)
    if order is ScanOrder.DESCENDING:
        children.reverse()
    return children


def _is_candidate(child: os.DirEntry) -> bool:
    try:
        return child.is_symlink() or child.is_file(follow_symlinks=False)
    except OSError as err:
        logger.warning(f"Cannot determine type of {child.path}: {err}")
        return False


@timing
def discover(
    search_path: str | None,
    allocator: Allocator,
    order: ScanOrder = ScanOrder.DESCENDING,
    max_path_length: int = DEFAULT_MAX_PATH,
) -> EntryList:
    """Build the list of executables reachable through ``search_path``.

    Directories are scanned in the order they appear, so an executable in an
    earlier directory shadows any later one with the same name. Unreadable
    directories and candidates that cannot be examined are skipped.

    Args:
        search_path: Raw colon-separated value, None if unset
        allocator: Allocator used for every entry
        order: Visiting order inside each directory
        max_path_length: Longest full path accepted, in bytes, terminator included

    Returns:
        EntryList with one entry per distinct executable name

    Raises:
        AllocationError: If an entry cannot be allocated. Entries collected
            so far are released before the error propagates.
    """
    entries = EntryList()
    directories = split_search_path(search_path)
    if not directories:
        logger.warning("Search path is not set, nothing to discover")
        return entries

    duplicates = 0
    try:
        for directory in directories:
            try:
                children = _list_directory(directory, order)
            except OSError as err:
                logger.debug(f"Skipping {directory}: {err}")
                continue

            for child in children:
                if not _is_candidate(child):
                    continue

                full_path = f"{directory}{SEPARATOR}{child.name}"
                size = len(os.fsencode(full_path)) + 1
                if size > max_path_length:
                    logger.warning(f"Path too long ({size} > {max_path_length} bytes), skipping: {full_path}")
                    continue

                try:
                    executable = is_executable(full_path)
                except OSError as err:
                    logger.warning(f"Cannot stat {full_path}: {err}")
                    continue
                if not executable:
                    continue

                entry = Entry.create(allocator, full_path)
                if not entries.append_unique(entry):
                    logger.debug(f"Shadowed: {full_path}")
                    entry.destroy(allocator)
                    duplicates += 1
    except AllocationError:
        logger.error(f"Allocation failed after {len(entries)} entries, releasing them")
        entries.destroy(allocator)
        raise

    logger.info(f"Discovered {len(entries)} executables in {len(directories)} directories ({duplicates} shadowed)")
    return entries
