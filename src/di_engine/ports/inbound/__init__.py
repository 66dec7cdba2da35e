"""Inbound ports - APIs the container offers to callers."""

from di_engine.ports.inbound.service_container import ServiceContainer

__all__ = [
    "ServiceContainer",
]
