"""Binding Registry.

Stores, per key, the binding that says how to produce a value plus the
key's lifecycle flag. A lifecycle flag can exist without a binding: keys that
were resolved without prior registration get their flag recorded on first
successful resolution.

Thread Safety:
    All operations take a single registry lock. Critical sections are
    dictionary reads and writes only; no user code runs under the lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterator

from di_engine.domain.entities import Binding
from di_engine.domain.value_objects import Key, key_name

logger = logging.getLogger(__name__)


class BindingRegistry:
    """Last-write-wins map of key -> binding and key -> shared flag."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._bindings: Dict[Key, Binding] = {}
        self._shared: Dict[Key, bool] = {}

    def register(self, binding: Binding) -> Binding | None:
        """Store a binding, replacing any prior binding for its key.

        Args:
            binding: The binding to store.

        Returns:
            The binding that was replaced, if any.
        """
        with self._lock:
            previous = self._bindings.get(binding.key)
            self._bindings[binding.key] = binding
            self._shared[binding.key] = binding.shared

        if previous is not None:
            logger.debug(
                "Replaced %s binding for %s with %s binding",
                previous.kind.value,
                key_name(binding.key),
                binding.kind.value,
            )
        return previous

    def get(self, key: Key) -> Binding | None:
        """Return the binding for a key, or None."""
        with self._lock:
            return self._bindings.get(key)

    def lifecycle(self, key: Key) -> bool | None:
        """Return the recorded shared flag for a key, or None if unrecorded."""
        with self._lock:
            return self._shared.get(key)

    def record_default_lifecycle(self, key: Key, shared: bool) -> bool:
        """Record a shared flag for a key unless one is already recorded.

        Returns:
            The flag in effect after the call.
        """
        with self._lock:
            return self._shared.setdefault(key, shared)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._bindings

    def __len__(self) -> int:
        with self._lock:
            return len(self._bindings)

    def __iter__(self) -> Iterator[Key]:
        with self._lock:
            return iter(list(self._bindings))

    def clear(self) -> None:
        """Drop every binding and lifecycle flag."""
        with self._lock:
            self._bindings.clear()
            self._shared.clear()
