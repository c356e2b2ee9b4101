"""
Resource helpers for graph algorithms.
"""

import gc
import logging
import os
import time
from typing import Optional

import psutil  # type: ignore # Missing stubs

logger = logging.getLogger(__name__)


class MemoryManager:
    """Memory ceiling for long-running searches."""

    def __init__(self, max_memory_mb: Optional[float] = None):
        gc.collect()

        self.max_memory = max_memory_mb * 1024 * 1024 if max_memory_mb else None
        self.start_memory = get_memory_usage()
        self._peak_memory = self.start_memory
        self._last_check = 0.0
        self._check_interval = 0.1  # seconds

    def check_memory(self) -> None:
        """
        Raise when the process grew more than the allowed amount.

        Checks are rate limited; calls inside the interval return at once.

        Raises:
            MemoryError: If growth since construction exceeds the ceiling
                after a garbage collection
        """
        if not self.max_memory:
            return

        current_time = time.monotonic()
        if current_time - self._last_check < self._check_interval:
            return
        self._last_check = current_time

        current = get_memory_usage()
        self._peak_memory = max(self._peak_memory, current)

        if current - self.start_memory > self.max_memory:
            gc.collect()
            current = get_memory_usage()
            if current - self.start_memory > self.max_memory:
                logger.warning(
                    f"Search aborted: memory grew {(current - self.start_memory) / 1024 / 1024:.1f}MB"
                )
                raise MemoryError(
                    f"Memory usage {current / 1024 / 1024:.1f}MB exceeds "
                    f"limit of {self.max_memory / 1024 / 1024:.1f}MB"
                )

    @property
    def peak_memory_mb(self) -> float:
        return self._peak_memory / 1024 / 1024


def get_memory_usage() -> int:
    """Resident set size of the current process in bytes."""
    process = psutil.Process(os.getpid())
    return int(process.memory_info().rss)
