"""Outbound ports - interfaces the container depends on."""

from di_engine.ports.outbound.reflector import Reflector

__all__ = [
    "Reflector",
]
