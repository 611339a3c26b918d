"""Interactive launcher for the executables on your search path."""

__version__ = "0.1.0"

from tmenu.common import (
    AllocationError,
    AppConfig,
    ConfigurationError,
    TmenuError,
    setup_logging,
)
from tmenu.discovery import ScanOrder, discover
from tmenu.entry import Entry, EntryList
from tmenu.filtering import FilterSession

__all__ = [
    "__version__",
    "AllocationError",
    "AppConfig",
    "ConfigurationError",
    "Entry",
    "EntryList",
    "FilterSession",
    "ScanOrder",
    "TmenuError",
    "discover",
    "setup_logging",
]
