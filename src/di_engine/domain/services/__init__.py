"""Domain services for binding storage, caching and parameter resolution."""

from di_engine.domain.services.binding_registry import BindingRegistry
from di_engine.domain.services.instance_cache import InstanceCache
from di_engine.domain.services.parameter_resolution import resolve_parameters
from di_engine.domain.services.resolution_guard import ResolutionGuard

__all__ = [
    "BindingRegistry",
    "InstanceCache",
    "ResolutionGuard",
    "resolve_parameters",
]
