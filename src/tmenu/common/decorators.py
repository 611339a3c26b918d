"""Reusable decorators for tmenu."""

import functools
import logging
import time
from collections.abc import Callable
from typing import Any


def timing(func: Callable) -> Callable:
    """Decorator to measure and log function execution time at debug level.

    Example:
        >>> @timing
        ... def discover(search_path, allocator):
        ...     return scan(search_path, allocator)
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        logger = logging.getLogger(func.__module__)
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            duration = time.perf_counter() - start
            logger.debug(f"{func.__name__} took {duration * 1000:.1f}ms")

    return wrapper
