"""Reflector port for constructor introspection.

This outbound port is the container's only view of the types it builds. The
resolver never inspects classes itself; it asks a Reflector:

- whether a key can be constructed at all
- what the key's constructor parameters are
- whether a value satisfies a declared parameter type
- to call the constructor with ordered arguments and keyword arguments

Implementations may use runtime introspection or an explicit per-key table
of descriptors.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Mapping, Protocol, Sequence

from di_engine.domain.value_objects import Key, ParameterDescriptor


class Reflector(Protocol):
    """Protocol for discovering and invoking constructors."""

    @abstractmethod
    def is_constructible(self, key: Key) -> bool:
        """Return True if the key names a concrete, instantiable type.

        Abstract classes, protocols and keys the reflector does not know
        about are not constructible.
        """
        ...

    @abstractmethod
    def get_constructor_parameters(self, key: Key) -> list[ParameterDescriptor] | None:
        """Return the constructor's parameters in declaration order.

        Positional parameters come first; keyword-only ones follow, flagged
        with ``keyword_only``.

        Args:
            key: A constructible key.

        Returns:
            The descriptors, or None if the type has no constructor of its
            own (it is then constructed with no arguments).
        """
        ...

    @abstractmethod
    def is_instance(self, value: Any, declared_type: Key) -> bool:
        """Return True if value already satisfies a declared parameter type."""
        ...

    @abstractmethod
    def construct(
        self, key: Key, args: Sequence[Any], kwargs: Mapping[str, Any] | None = None
    ) -> Any:
        """Call the key's constructor with positional and keyword arguments.

        Raises:
            ConstructionError: If the constructor raises.
        """
        ...
