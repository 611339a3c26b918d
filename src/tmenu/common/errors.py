"""Custom exceptions for tmenu."""


class TmenuError(Exception):
    """Base exception for all tmenu errors."""

    pass


class ConfigurationError(TmenuError):
    """Raised when configuration is invalid."""

    pass


class AllocationError(TmenuError):
    """Raised when the allocator cannot provide memory for an entry.

    Fatal for discovery: a list built before the failure is never shown.
    """

    pass


class AllocatorError(TmenuError):
    """Raised when an allocator is misused or still holds live blocks."""

    pass


class EntryListError(TmenuError):
    """Raised when an entry list operation is called outside its contract."""

    pass


class LaunchError(TmenuError):
    """Raised when the selected executable cannot replace the process."""

    pass
