"""ServiceContainer port - the public surface of the container.

Factories registered with ``register_factory`` receive an object satisfying
this protocol, so they can resolve their own dependencies.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Callable, Protocol, Sequence, TypeVar

from di_engine.domain.value_objects import Key

T = TypeVar("T")


class ServiceContainer(Protocol):
    """Protocol for registering bindings and resolving keys."""

    @abstractmethod
    def register_instance(self, key: Key, value: Any, shared: bool = True) -> ServiceContainer:
        """Bind a key to an already-constructed value.

        The value is also placed in the instance cache straight away.
        Replaces any prior binding for the key.
        """
        ...

    @abstractmethod
    def register_template(
        self, key: Key, args: Sequence[Any], shared: bool = True
    ) -> ServiceContainer:
        """Bind a key to literal positional constructor arguments.

        The arguments are merged with recursively resolved dependencies each
        time the key is constructed. Replaces any prior binding for the key.
        """
        ...

    @abstractmethod
    def register_factory(
        self, key: Key, factory: Callable[[ServiceContainer], Any], shared: bool = True
    ) -> ServiceContainer:
        """Bind a key to a ``(container) -> instance`` callable.

        Replaces any prior binding for the key.
        """
        ...

    @abstractmethod
    def has(self, key: Key) -> bool:
        """Return True if the key has a binding or a cached instance."""
        ...

    @abstractmethod
    def resolve(self, key: type[T] | Key) -> T:
        """Produce the value for a key.

        Raises:
            UnresolvableTypeError: If the key cannot be produced.
            CircularDependencyError: If the key depends on itself.
        """
        ...
