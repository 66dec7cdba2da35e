"""Errors raised while resolving keys.

Every error carries the key that failed. Errors propagate to the caller of
``resolve``; a failed resolution leaves nothing cached for the failing key.
"""

from __future__ import annotations

from typing import Sequence

from di_engine.domain.value_objects import Key, key_name


class ResolutionError(Exception):
    """Base class for all resolution failures."""

    def __init__(self, message: str, key: Key | None = None) -> None:
        super().__init__(message)
        self.key = key


class UnresolvableTypeError(ResolutionError):
    """Key is not constructible and has no registered producer.

    Also raised, from the nested resolve, when a constructor parameter names a
    non-constructible type and declares no default.
    """

    def __init__(self, key: Key) -> None:
        super().__init__(
            f"Cannot resolve {key_name(key)}: not constructible and no binding registered",
            key=key,
        )


class CircularDependencyError(ResolutionError):
    """Key was requested again while it was still being resolved."""

    def __init__(self, chain: Sequence[Key]) -> None:
        self.chain = tuple(chain)
        names = " -> ".join(key_name(k) for k in self.chain)
        super().__init__(f"Circular dependency detected: {names}", key=self.chain[-1])


class ResolutionDepthError(ResolutionError):
    """Nested resolution went deeper than the configured limit."""

    def __init__(self, key: Key, depth: int) -> None:
        self.depth = depth
        super().__init__(
            f"Resolution depth {depth} exceeded while resolving {key_name(key)}",
            key=key,
        )


class ConstructionError(ResolutionError):
    """The target's constructor raised while being called."""

    def __init__(self, key: Key, reason: str) -> None:
        super().__init__(f"Failed to construct {key_name(key)}: {reason}", key=key)
