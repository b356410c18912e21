"""Instrumented allocator used by the queue to account for every block."""
from __future__ import annotations

import logging
import random
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

logger = logging.getLogger(__name__)


class AllocationFailure(MemoryError):
    """Storage could not be obtained."""


class HeapError(Exception):
    """Misuse of the allocator: double free, leaked blocks, forbidden allocation."""


class Allocator:
    """Block accounting for queue storage.

    A tracking allocator holds every live block so it can
    detect double and foreign frees; those blocks stay reachable until
    freed. With ``track=False`` only the counters are kept, so a queue
    dropped without ``free()`` is garbage collected as usual; the shared
    ``default_allocator()`` works this way.
    """

    def __init__(self, fail_probability: float = 0.0, seed: Optional[int] = None,
                 track: bool = True):
        if not 0.0 <= fail_probability <= 1.0:
            raise ValueError(f"fail_probability must be within [0, 1], got {fail_probability}")
        self.fail_probability = fail_probability
        self.track = track
        self._rng = random.Random(seed)
        self._blocks: Dict[int, Any] = {}
        self._fail_countdown: Optional[int] = None
        self._forbidden = 0
        self.allocated = 0
        self.freed = 0
        self.peak = 0

    # ---- counters ----
    @property
    def live(self) -> int:
        if not self.track:
            return self.allocated - self.freed
        return len(self._blocks)

    def owns(self, block: Any) -> bool:
        return self._blocks.get(id(block)) is block

    # ---- failure injection ----
    def fail_after(self, n: int) -> None:
        """Let ``n`` more allocations succeed, then fail the next one."""
        if n < 0:
            raise ValueError("n must be non-negative")
        self._fail_countdown = n

    def _should_fail(self) -> bool:
        if self._fail_countdown is not None:
            if self._fail_countdown == 0:
                self._fail_countdown = None
                return True
            self._fail_countdown -= 1
        return self.fail_probability > 0.0 and self._rng.random() < self.fail_probability

    @contextmanager
    def forbid_allocation(self) -> Iterator["Allocator"]:
        self._forbidden += 1
        try:
            yield self
        finally:
            self._forbidden -= 1

    # ---- allocate/free ----
    def allocate(self, block: Any) -> Any:
        if self._forbidden:
            raise HeapError(f"allocation of {type(block).__name__} while allocation is forbidden")
        if self._should_fail():
            logger.debug("injected allocation failure for %s", type(block).__name__)
            raise AllocationFailure(f"could not allocate {type(block).__name__}")
        if self.track:
            self._blocks[id(block)] = block
        self.allocated += 1
        self.peak = max(self.peak, self.live)
        return block

    def free(self, block: Any) -> None:
        if block is None:
            return
        if self.track:
            if not self.owns(block):
                raise HeapError(f"attempted to free unallocated or already freed {type(block).__name__}")
            del self._blocks[id(block)]
        self.freed += 1

    def check_leaks(self) -> None:
        if self.live:
            raise HeapError(f"{self.live} block(s) still allocated")

    def __repr__(self) -> str:
        return (f"Allocator(allocated={self.allocated}, freed={self.freed}, "
                f"live={self.live}, fail_probability={self.fail_probability})")


_default: Optional[Allocator] = None


def default_allocator() -> Allocator:
    global _default
    if _default is None:
        _default = Allocator(track=False)
    return _default
