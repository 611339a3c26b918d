"""Core utilities for tmenu."""

from tmenu.common.config import AppConfig, LauncherConfig
from tmenu.common.decorators import timing
from tmenu.common.errors import (
    AllocationError,
    AllocatorError,
    ConfigurationError,
    EntryListError,
    LaunchError,
    TmenuError,
)
from tmenu.common.logging import setup_logging

__all__ = [
    "AppConfig",
    "LauncherConfig",
    "TmenuError",
    "ConfigurationError",
    "AllocationError",
    "AllocatorError",
    "EntryListError",
    "LaunchError",
    "setup_logging",
    "timing",
]
