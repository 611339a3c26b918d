"""Allocation strategies injected into entry construction.

Entries ask an allocator for a block sized from the measured path, so a
debug allocator can be swapped in to count live blocks, or a budgeted one to
make allocation fail on purpose.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from tmenu.common.errors import AllocatorError, ConfigurationError

logger = logging.getLogger(__name__)


class Allocator(ABC):
    """Capability handed to entry construction and list teardown."""

    @abstractmethod
    def allocate(self, size: int) -> bytearray | None:
        """Return a zero-filled block of ``size`` bytes, or None on failure."""

    @abstractmethod
    def release(self, block: bytearray) -> None:
        """Give a block obtained from ``allocate`` back."""


class DefaultAllocator(Allocator):
    """Plain allocator backed by ``bytearray``."""

    def allocate(self, size: int) -> bytearray | None:
        if size < 0:
            return None
        return bytearray(size)

    def release(self, block: bytearray) -> None:
        pass


class TrackingAllocator(DefaultAllocator):
    """Debug allocator that keeps every live block and reports leaks."""

    def __init__(self):
        self._live: dict[int, bytearray] = {}
        self.allocations = 0
        self.releases = 0

    @property
    def live(self) -> int:
        return len(self._live)

    @property
    def live_bytes(self) -> int:
        return sum(len(block) for block in self._live.values())

    def allocate(self, size: int) -> bytearray | None:
        block = super().allocate(size)
        if block is not None:
            self._live[id(block)] = block
            self.allocations += 1
        return block

    def release(self, block: bytearray) -> None:
        if self._live.pop(id(block), None) is None:
            raise AllocatorError("release of a block this allocator does not own")
        self.releases += 1

    def check_leaks(self) -> None:
        """Raise if any block is still live.

        Raises:
            AllocatorError: With the number of leaked blocks and bytes
        """
        if self._live:
            raise AllocatorError(f"{self.live} block(s) leaked ({self.live_bytes} bytes)")
        logger.debug(f"No leaks: {self.allocations} allocations, {self.releases} releases")


class BudgetAllocator(TrackingAllocator):
    """Tracking allocator that fails once live bytes would exceed a budget."""

    def __init__(self, budget: int):
        super().__init__()
        self.budget = budget

    def allocate(self, size: int) -> bytearray | None:
        if self.live_bytes + size > self.budget:
            logger.debug(f"Budget exhausted: {self.live_bytes} + {size} > {self.budget}")
            return None
        return super().allocate(size)


def get_allocator(name: str) -> Allocator:
    """Build the allocator named by configuration.

    Args:
        name: ``default`` or ``debug``

    Raises:
        ConfigurationError: If the name is unknown
    """
    if name == "default":
        return DefaultAllocator()
    if name == "debug":
        return TrackingAllocator()
    raise ConfigurationError(f"Unknown allocator: {name!r}")
