"""
DI Engine - Runtime Dependency Injection Container

Resolves classes by reading their constructor parameters and recursively
resolving each typed dependency, with instance, template and factory
overrides and per-key singleton/transient lifecycles.
"""

__version__ = "0.1.0"

from di_engine.application.container import Container
from di_engine.domain.exceptions import (
    CircularDependencyError,
    ConstructionError,
    ResolutionDepthError,
    ResolutionError,
    UnresolvableTypeError,
)
from di_engine.domain.value_objects import MISSING, Key, ParameterDescriptor
from di_engine.ports.inbound.service_container import ServiceContainer
from di_engine.ports.outbound.reflector import Reflector

__all__ = [
    "__version__",
    "CircularDependencyError",
    "ConstructionError",
    "Container",
    "Key",
    "MISSING",
    "ParameterDescriptor",
    "Reflector",
    "ResolutionDepthError",
    "ResolutionError",
    "ServiceContainer",
    "UnresolvableTypeError",
]
