"""Replace the current process with a selected executable."""

import logging
import os

from tmenu.common.errors import LaunchError
from tmenu.entry import Entry

logger = logging.getLogger(__name__)


def launch(entry: Entry) -> None:
    """Exec ``entry.path`` with its display name as argv[0]. Does not return on success.

    Raises:
        LaunchError: If the exec call fails
    """
    logger.info(f"Launching {entry.path}")
    try:
        os.execv(entry.path, [entry.name])
    except OSError as err:
        raise LaunchError(f"Failed to launch {entry.path}: {err}") from err
