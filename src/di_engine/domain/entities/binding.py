"""Bindings: per-key recipes for producing a value.

A binding pairs a key with a producer and a lifecycle flag. There are three
kinds of producer:

    - InstanceProducer: an already-constructed value.
    - TemplateProducer: literal positional constructor arguments, merged with
      recursively resolved dependencies at construction time.
    - FactoryProducer: a callable taking the container and returning the value.

Bindings are replaced wholesale on re-registration; nothing is merged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Union

from di_engine.domain.value_objects import Key

if TYPE_CHECKING:
    from di_engine.ports.inbound.service_container import ServiceContainer


Factory = Callable[["ServiceContainer"], Any]


class ProducerKind(str, Enum):
    """Kind of producer held by a binding."""

    INSTANCE = "instance"
    TEMPLATE = "template"
    FACTORY = "factory"


@dataclass(frozen=True)
class InstanceProducer:
    """Wraps an already-constructed value."""

    value: Any
    kind: ProducerKind = field(default=ProducerKind.INSTANCE, init=False)


@dataclass(frozen=True)
class TemplateProducer:
    """Wraps literal positional constructor arguments.

    An empty template is what the resolver uses for keys that were never
    registered: construct with reflective resolution only.
    """

    args: tuple[Any, ...] = ()
    kind: ProducerKind = field(default=ProducerKind.TEMPLATE, init=False)


@dataclass(frozen=True)
class FactoryProducer:
    """Wraps a ``(container) -> instance`` callable."""

    factory: Factory
    kind: ProducerKind = field(default=ProducerKind.FACTORY, init=False)


Producer = Union[InstanceProducer, TemplateProducer, FactoryProducer]


@dataclass(frozen=True)
class Binding:
    """Registered recipe for one key."""

    key: Key
    producer: Producer
    shared: bool = True

    @property
    def kind(self) -> ProducerKind:
        """Return the kind of producer."""
        return self.producer.kind
