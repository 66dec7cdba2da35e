"""Ports layer - interface definitions following Hexagonal Architecture.

- Inbound ports: APIs offered to callers (ServiceContainer)
- Outbound ports: what the container needs from outside (Reflector)

Adapters implement these ports with concrete functionality.
"""

from di_engine.ports.inbound import ServiceContainer
from di_engine.ports.outbound import Reflector

__all__ = [
    "Reflector",
    "ServiceContainer",
]
