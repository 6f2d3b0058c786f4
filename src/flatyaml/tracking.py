"""Allocation bookkeeping for debug runs and leak checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger("flatyaml.tracking")


@dataclass
class AllocationTracker:
    """Counts buffer and entry allocations.

    Handed to ``load`` / ``parse_all`` / the release functions by the caller;
    nothing in the package keeps one globally.
    """

    allocated: int = 0
    total_allocated: int = 0
    total_freed: int = 0

    def allocate(self, what: str) -> None:
        self.allocated += 1
        self.total_allocated += 1
        logger.debug("allocate %s (live=%d)", what, self.allocated)

    def free(self, what: str) -> None:
        self.allocated -= 1
        self.total_freed += 1
        logger.debug("free %s (live=%d)", what, self.allocated)

    @property
    def leaks(self) -> int:
        return self.allocated

    def reset(self) -> None:
        self.allocated = 0
        self.total_allocated = 0
        self.total_freed = 0
