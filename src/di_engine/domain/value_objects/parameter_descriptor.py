"""Keys and constructor parameter descriptors.

A key identifies something the container can produce. Most keys are the
class object itself, but any hashable token works (e.g. ``"Clock"``) as long
as a binding or a reflector knows how to produce it.

A ParameterDescriptor is the read-only view of one constructor parameter that
the resolver consumes. Descriptors are produced by a Reflector and never
mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, TypeAlias


Key: TypeAlias = Hashable
"""Identifier used to look up bindings and cached instances."""


class _Missing:
    """Sentinel type for 'no default value declared'."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()
"""Marks a parameter without a declared default (``None`` is a valid default)."""


def key_name(key: Key) -> str:
    """Return a readable name for a key, for messages and log fields."""
    if isinstance(key, str):
        return key
    qualname = getattr(key, "__qualname__", None)
    if qualname is not None:
        return qualname
    return repr(key)


@dataclass(frozen=True)
class ParameterDescriptor:
    """Typed view of one constructor parameter.

    Attributes:
        position: Zero-based declaration position.
        name: Parameter name as declared.
        declared_type: Class/interface the parameter asks for, or None when the
            parameter is untyped or typed with a non-class (scalar) annotation.
        default: Declared default value, or MISSING.
        keyword_only: True for parameters after ``*`` (passed by name).
            Keyword-only parameters always follow the positional ones.
    """

    position: int
    name: str
    declared_type: Key | None = None
    default: Any = MISSING
    keyword_only: bool = False

    @property
    def has_default(self) -> bool:
        """Return True if the parameter declares a default value."""
        return self.default is not MISSING

    @property
    def has_declared_type(self) -> bool:
        """Return True if the parameter names a resolvable dependency."""
        return self.declared_type is not None
