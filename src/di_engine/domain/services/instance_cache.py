"""Instance Cache for shared (singleton) keys.

Holds instances that have already been produced for shared keys and hands
out one re-entrant lock per key. The resolver wraps "check cache, else
construct and store" in ``building(key)``, so two threads resolving the same
not-yet-cached key construct it once. Locks of different keys are
independent; the cache-wide lock only guards the dictionaries.

Each thread's cycle check only sees its own resolution chain, so ``building``
also keeps a wait-for graph: which thread is building which key, and which key
each blocked thread is waiting on. A thread about to block on a key whose
builder is (transitively) waiting on a key this thread is building would
never wake up; it raises CircularDependencyError instead.

Values may legitimately be None, so lookups report hits through a flag
instead of by value.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from di_engine.domain.exceptions import CircularDependencyError
from di_engine.domain.value_objects import Key


class InstanceCache:
    """Key -> instance map with per-key construction locks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._instances: Dict[Key, Any] = {}
        self._key_locks: Dict[Key, threading.RLock] = {}

        # Wait-for graph
        self._builders: Dict[Key, int] = {}  # key -> thread building it
        self._waiting: Dict[int, Key] = {}  # thread -> key it is blocked on

    def lookup(self, key: Key) -> tuple[bool, Any]:
        """Look up a cached instance.

        Returns:
            (True, instance) on a hit, (False, None) on a miss.
        """
        with self._lock:
            if key in self._instances:
                return True, self._instances[key]
            return False, None

    def store(self, key: Key, instance: Any) -> None:
        """Store (or replace) the instance for a key."""
        with self._lock:
            self._instances[key] = instance

    def lock_for(self, key: Key) -> threading.RLock:
        """Return the construction lock dedicated to a key."""
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._key_locks[key] = lock
            return lock

    @contextmanager
    def building(self, key: Key) -> Iterator[None]:
        """Hold the key's construction lock for the duration of the block.

        Raises:
            CircularDependencyError: If waiting for the lock would close a
                cycle of threads, each blocked on a key another one holds.
        """
        me = threading.get_ident()
        lock = self.lock_for(key)
        if not lock.acquire(blocking=False):
            self._wait_for(key, lock, me)

        with self._lock:
            reentered = self._builders.get(key) == me
            self._builders[key] = me
        try:
            yield
        finally:
            if not reentered:
                with self._lock:
                    self._builders.pop(key, None)
            lock.release()

    def _wait_for(self, key: Key, lock: threading.RLock, me: int) -> None:
        with self._lock:
            cycle = self._wait_cycle(key, me)
            if cycle is not None:
                raise CircularDependencyError(cycle)
            self._waiting[me] = key
        try:
            lock.acquire()
        finally:
            with self._lock:
                del self._waiting[me]

    def _wait_cycle(self, key: Key, me: int) -> list[Key] | None:
        """Follow builder -> awaited key edges from ``key``; caller holds _lock."""
        chain = [key]
        seen: set[int] = set()
        builder = self._builders.get(key)
        while builder is not None and builder not in seen:
            if builder == me:
                return [*chain, key]
            seen.add(builder)
            awaited = self._waiting.get(builder)
            if awaited is None:
                return None
            chain.append(awaited)
            builder = self._builders.get(awaited)
        return None

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._instances

    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)

    def clear(self) -> None:
        """Drop every cached instance.

        Keys being built keep their wait-for entries until their builders
        finish.
        """
        with self._lock:
            self._instances.clear()
            self._key_locks.clear()
