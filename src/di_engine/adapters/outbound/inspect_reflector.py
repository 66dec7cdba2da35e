"""Reflector implementation backed by ``inspect`` and ``typing``.

Reads ``__init__`` signatures at resolution time and turns each positional
and keyword-only parameter into a ParameterDescriptor. Annotations are
evaluated with ``typing.get_type_hints`` so modules using ``from __future__
import annotations`` work the same as eagerly annotated ones. When one
annotation cannot be evaluated (an undefined forward reference), the others
are evaluated one by one and only that parameter loses its declared type.

Declared types:
    - ``Optional[X]`` / ``X | None`` is treated as ``X``.
    - ``Annotated[X, ...]`` is treated as ``X``.
    - Builtin scalars and containers (``int``, ``str``, ``list``, ...) and
      ``Any`` are not dependencies; such parameters get no declared type.
    - Keyword-only parameters are described with ``keyword_only`` set and
      passed by name.
    - Variadic parameters (``*args``, ``**kwargs``) are not described.

Descriptors are cached per class.
"""

from __future__ import annotations

import inspect
import threading
import types
from typing import Annotated, Any, Dict, Mapping, Sequence, Union, get_args, get_origin, get_type_hints

from di_engine.domain.exceptions import ConstructionError, ResolutionError
from di_engine.domain.value_objects import MISSING, Key, ParameterDescriptor

_DESCRIBED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


class InspectReflector:
    """Introspects Python classes for the resolver."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._descriptors: Dict[type, tuple[ParameterDescriptor, ...] | None] = {}

    def is_constructible(self, key: Key) -> bool:
        """Return True for concrete classes."""
        if not inspect.isclass(key):
            return False
        if inspect.isabstract(key):
            return False
        # Protocol classes refuse instantiation.
        if getattr(key, "_is_protocol", False):
            return False
        return True

    def get_constructor_parameters(self, key: Key) -> list[ParameterDescriptor] | None:
        """Return ``__init__`` parameters, or None if not overridden."""
        with self._lock:
            if key in self._descriptors:
                cached = self._descriptors[key]
                return None if cached is None else list(cached)

        described = self._describe(key)

        with self._lock:
            self._descriptors[key] = described
        return None if described is None else list(described)

    def is_instance(self, value: Any, declared_type: Key) -> bool:
        if not inspect.isclass(declared_type):
            return False
        try:
            return isinstance(value, declared_type)
        except TypeError:
            # Non runtime-checkable protocols.
            return False

    def construct(
        self, key: Key, args: Sequence[Any], kwargs: Mapping[str, Any] | None = None
    ) -> Any:
        try:
            return key(*args, **(kwargs or {}))
        except ResolutionError:
            raise
        except Exception as e:
            raise ConstructionError(key, f"{type(e).__name__}: {e}") from e

    def _describe(self, key: type) -> tuple[ParameterDescriptor, ...] | None:
        init = key.__init__
        if init is object.__init__:
            return None

        try:
            signature = inspect.signature(init)
        except (TypeError, ValueError):
            # Builtin initialisers without a signature.
            return None

        hints = _type_hints(init)
        parameters = list(signature.parameters.values())[1:]  # Skip 'self'

        descriptors = []
        for param in parameters:
            if param.kind not in _DESCRIBED_KINDS:
                continue
            if hints is not None:
                annotation = hints.get(param.name, param.annotation)
            else:
                annotation = _evaluate(param.annotation, init, key)
            descriptors.append(
                ParameterDescriptor(
                    position=len(descriptors),
                    name=param.name,
                    declared_type=_dependency_type(annotation),
                    default=MISSING if param.default is inspect.Parameter.empty else param.default,
                    keyword_only=param.kind is inspect.Parameter.KEYWORD_ONLY,
                )
            )
        return tuple(descriptors)


def _type_hints(init: Any) -> dict[str, Any] | None:
    """Evaluate all ``__init__`` annotations, or None if any of them fails."""
    try:
        return get_type_hints(init, include_extras=True)
    except (NameError, TypeError):
        return None


def _evaluate(annotation: Any, init: Any, key: type) -> Any:
    """Evaluate one string annotation in the namespaces get_type_hints uses."""
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, getattr(init, "__globals__", {}), dict(vars(key)))
    except (NameError, AttributeError, SyntaxError, TypeError):
        return inspect.Parameter.empty


def _dependency_type(annotation: Any) -> type | None:
    """Return the class a parameter depends on, or None."""
    if annotation is inspect.Parameter.empty or annotation is Any:
        return None

    origin = get_origin(annotation)
    if origin is Annotated:
        return _dependency_type(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) != 1:
            return None
        return _dependency_type(members[0])
    if origin is not None:
        # Parametrised generics such as list[int].
        return None

    if not inspect.isclass(annotation):
        return None
    if annotation.__module__ == "builtins":
        return None
    return annotation
