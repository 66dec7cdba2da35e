"""Outbound adapters - Reflector implementations."""

from di_engine.adapters.outbound.inspect_reflector import InspectReflector
from di_engine.adapters.outbound.table_reflector import TableReflector, TypeDefinition

__all__ = [
    "InspectReflector",
    "TableReflector",
    "TypeDefinition",
]
