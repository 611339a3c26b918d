"""Configuration management for tmenu."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from tmenu.common.errors import ConfigurationError

SCAN_ORDERS = ("asc", "desc")
ALLOCATORS = ("default", "debug")
DEFAULT_MAX_PATH = 4096


@dataclass
class LauncherConfig:
    """Discovery and launcher configuration."""

    search_path: str | None
    scan_order: str = "desc"
    allocator: str = "default"
    max_path: str | int = DEFAULT_MAX_PATH

    @classmethod
    def from_env(cls) -> LauncherConfig:
        """Load configuration from environment variables.

        Expected variables:
            PATH: Colon-separated directories to scan
            TMENU_PATH: Overrides PATH for discovery only (optional)
            TMENU_SCAN_ORDER: Order inside each directory, ``desc`` or ``asc`` (optional)
            TMENU_ALLOCATOR: ``default`` or ``debug`` (optional)
            TMENU_MAX_PATH: Longest full path accepted, in bytes (optional)

        Returns:
            LauncherConfig instance
        """
        search_path = os.getenv("TMENU_PATH")
        if search_path is None:
            search_path = os.getenv("PATH")
        return cls(
            search_path=search_path,
            scan_order=(os.getenv("TMENU_SCAN_ORDER") or "desc").lower(),
            allocator=(os.getenv("TMENU_ALLOCATOR") or "default").lower(),
            max_path=os.getenv("TMENU_MAX_PATH") or DEFAULT_MAX_PATH,
        )

    @property
    def max_path_length(self) -> int:
        return int(self.max_path)

    def validate(self) -> dict[str, str]:
        """Validate configuration.

        An unset search path is not an error: discovery reports it and
        returns nothing.

        Returns:
            Dict of field names to error messages (empty if valid)
        """
        errors = {}
        if self.scan_order not in SCAN_ORDERS:
            errors["scan_order"] = f"TMENU_SCAN_ORDER must be one of {', '.join(SCAN_ORDERS)}"
        if self.allocator not in ALLOCATORS:
            errors["allocator"] = f"TMENU_ALLOCATOR must be one of {', '.join(ALLOCATORS)}"
        try:
            if self.max_path_length <= 0:
                errors["max_path"] = "TMENU_MAX_PATH must be positive"
        except ValueError:
            errors["max_path"] = f"TMENU_MAX_PATH is not an integer: {self.max_path!r}"
        return errors


class AppConfig:
    """Main application configuration loader."""

    def __init__(self, env_file: Path | None = None, load_env: bool = True):
        """Initialize configuration from environment.

        Args:
            env_file: Optional path to .env file. If not provided,
                     looks for .env in current directory or ~/.tmenu.env
            load_env: Whether to load from .env files (default True). Set False in tests.
        """
        if load_env:
            if env_file and env_file.exists():
                load_dotenv(env_file)
            else:
                for default in [
                    Path(".env"),
                    Path.home() / ".tmenu.env",
                ]:
                    if default.exists():
                        load_dotenv(default)
                        break

        self.launcher = LauncherConfig.from_env()

        self.log_level = os.getenv("LOG_LEVEL", "WARNING")
        log_file = os.getenv("TMENU_LOG_FILE")
        self.log_file = Path(log_file) if log_file else None

    def validate(self, sections: list[str] | None = None) -> dict[str, dict[str, str]]:
        """Validate configuration sections.

        Args:
            sections: Section names to validate. If None, validates all.
                     Valid names: 'launcher'

        Returns:
            Dictionary mapping section names to dicts of field errors
        """
        all_sections = {
            "launcher": self.launcher,
        }

        if sections is None:
            sections = list(all_sections.keys())

        return {name: all_sections[name].validate() for name in sections if name in all_sections}

    def require_valid(self, *sections: str) -> None:
        """Require specified sections to have valid configuration.

        Raises:
            ConfigurationError: If any specified section has invalid config

        Example:
            >>> config = AppConfig()
            >>> config.require_valid('launcher')  # Raises if invalid
        """
        errors = self.validate(list(sections) or None)

        all_errors = []
        for section, field_errors in errors.items():
            for field, error_msg in field_errors.items():
                all_errors.append(f"{section}.{field}: {error_msg}")

        if all_errors:
            raise ConfigurationError("Configuration validation failed:\n  - " + "\n  - ".join(all_errors))
