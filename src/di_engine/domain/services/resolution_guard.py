"""Per-thread tracking of keys currently being resolved.

Each thread has its own resolution chain. Entering a key already in the
chain means the dependency graph has a cycle; entering beyond ``max_depth``
means it is deeper than allowed. Both fail before any construction happens.
Cycles spanning threads are caught by InstanceCache.building instead.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from di_engine.domain.exceptions import CircularDependencyError, ResolutionDepthError
from di_engine.domain.value_objects import Key


class ResolutionGuard:
    """Detects cycles and bounds nesting for recursive resolution."""

    def __init__(self, max_depth: int = 64) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self._max_depth = max_depth
        self._local = threading.local()

    @property
    def max_depth(self) -> int:
        """Return the maximum nesting depth."""
        return self._max_depth

    def _chain(self) -> list[Key]:
        chain = getattr(self._local, "chain", None)
        if chain is None:
            chain = []
            self._local.chain = chain
        return chain

    @property
    def depth(self) -> int:
        """Return how many resolutions are in progress on this thread."""
        return len(self._chain())

    @contextmanager
    def entering(self, key: Key) -> Iterator[None]:
        """Mark a key as in progress for the duration of the block.

        Raises:
            CircularDependencyError: If the key is already in progress.
            ResolutionDepthError: If the chain would exceed max_depth.
        """
        chain = self._chain()
        if key in chain:
            start = chain.index(key)
            raise CircularDependencyError([*chain[start:], key])
        if len(chain) >= self._max_depth:
            raise ResolutionDepthError(key, len(chain) + 1)

        chain.append(key)
        try:
            yield
        finally:
            chain.pop()
