"""Infrastructure layer - cross-cutting concerns.

The process-wide container accessor lives in
``di_engine.infrastructure.container`` and is imported from there directly.
"""

from di_engine.infrastructure.config import Config, ContainerConfig, get_config
from di_engine.infrastructure.logging import setup_logging, get_logger
from di_engine.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from di_engine.infrastructure.tracing import setup_tracing, get_tracer, trace_span

__all__ = [
    "Config",
    "ContainerConfig",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
]
