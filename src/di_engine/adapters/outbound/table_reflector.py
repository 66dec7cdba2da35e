"""Reflector implementation backed by an explicit descriptor table.

Instead of introspecting classes, every producible key is declared up front
with the callable that builds it and its parameter descriptors. This lets
non-class keys (e.g. ``"Logger"``) take part in reflective resolution, and
gives full control over what the resolver sees.

Usage:
    reflector = TableReflector()
    reflector.define_abstract("Writer", instance_of=Writer)
    reflector.define(
        "Logger",
        Logger,
        [ParameterDescriptor(position=0, name="writer", declared_type="Writer")],
    )
    container = Container(reflector=reflector)
"""

from __future__ import annotations

import inspect
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Sequence

from di_engine.domain.exceptions import ConstructionError, ResolutionError
from di_engine.domain.value_objects import Key, ParameterDescriptor


@dataclass(frozen=True)
class TypeDefinition:
    """Table entry for one key.

    Attributes:
        constructor: Callable that builds the value, or None for abstract keys.
        parameters: Constructor parameters, or None when the constructor takes
            no parameters at all.
        instance_of: Class used to decide whether a value satisfies the key.
    """

    constructor: Callable[..., Any] | None
    parameters: tuple[ParameterDescriptor, ...] | None = None
    instance_of: type | None = None


class TableReflector:
    """Reflector answering from declared TypeDefinitions."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._table: Dict[Key, TypeDefinition] = {}

    def define(
        self,
        key: Key,
        constructor: Callable[..., Any],
        parameters: Sequence[ParameterDescriptor] | None = None,
    ) -> TableReflector:
        """Declare a constructible key.

        Args:
            key: The key being described.
            constructor: Called with the resolved arguments; keyword-only
                parameters are passed by name.
            parameters: Constructor parameters in order; None if the
                constructor is called without arguments.
        """
        instance_of = constructor if inspect.isclass(constructor) else None
        definition = TypeDefinition(
            constructor=constructor,
            parameters=None if parameters is None else tuple(parameters),
            instance_of=instance_of,
        )
        with self._lock:
            self._table[key] = definition
        return self

    def define_abstract(self, key: Key, instance_of: type | None = None) -> TableReflector:
        """Declare a key that can only be produced through a binding."""
        with self._lock:
            self._table[key] = TypeDefinition(constructor=None, instance_of=instance_of)
        return self

    def _lookup(self, key: Key) -> TypeDefinition | None:
        with self._lock:
            return self._table.get(key)

    def is_constructible(self, key: Key) -> bool:
        definition = self._lookup(key)
        return definition is not None and definition.constructor is not None

    def get_constructor_parameters(self, key: Key) -> list[ParameterDescriptor] | None:
        definition = self._lookup(key)
        if definition is None or definition.parameters is None:
            return None
        return list(definition.parameters)

    def is_instance(self, value: Any, declared_type: Key) -> bool:
        definition = self._lookup(declared_type)
        if definition is not None and definition.instance_of is not None:
            return isinstance(value, definition.instance_of)
        if inspect.isclass(declared_type):
            return isinstance(value, declared_type)
        return False

    def construct(
        self, key: Key, args: Sequence[Any], kwargs: Mapping[str, Any] | None = None
    ) -> Any:
        definition = self._lookup(key)
        if definition is None or definition.constructor is None:
            raise ConstructionError(key, "no constructor defined")
        try:
            return definition.constructor(*args, **(kwargs or {}))
        except ResolutionError:
            raise
        except Exception as e:
            raise ConstructionError(key, f"{type(e).__name__}: {e}") from e
