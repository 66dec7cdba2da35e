"""Domain entities for the container."""

from di_engine.domain.entities.binding import (
    Binding,
    Factory,
    FactoryProducer,
    InstanceProducer,
    Producer,
    ProducerKind,
    TemplateProducer,
)

__all__ = [
    "Binding",
    "Factory",
    "FactoryProducer",
    "InstanceProducer",
    "Producer",
    "ProducerKind",
    "TemplateProducer",
]
