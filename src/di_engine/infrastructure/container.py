"""Process-wide container accessor.

One Container per process, built on the first ``get_container()`` call from
the global configuration (logging, metrics and tracing included) and reused
afterwards. The module-level functions forward to that container, so call
sites that cannot be handed a container explicitly can still register and
resolve:

    from di_engine.infrastructure import container as di

    di.register_factory(Clock, lambda c: SystemClock())
    clock = di.resolve(Clock)

Prefer passing a Container explicitly where possible; this module exists for
the edges of an application (entry points, framework hooks).
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Sequence, TypeVar

from di_engine.application.container import Container
from di_engine.domain.value_objects import Key
from di_engine.infrastructure.config import Config, get_config
from di_engine.infrastructure.logging import get_logger, setup_logging
from di_engine.infrastructure.metrics import setup_metrics
from di_engine.infrastructure.tracing import setup_tracing
from di_engine.ports.inbound.service_container import ServiceContainer

T = TypeVar("T")

_container: Container | None = None
_container_lock = threading.Lock()


def create_container(config: Config | None = None) -> Container:
    """Build a container wired to the configured observability stack.

    Args:
        config: Configuration to use. Defaults to the global configuration.

    Returns:
        A new Container.
    """
    config = config or get_config()
    observability = config.observability

    setup_logging(level=observability.log_level, log_format=observability.log_format)
    if observability.otel_endpoint:
        setup_tracing(
            service_name=observability.otel_service_name,
            otlp_endpoint=observability.otel_endpoint,
        )
    metrics = None
    if observability.metrics_enabled:
        metrics = setup_metrics(port=observability.metrics_port)

    container = Container(config=config.container, metrics=metrics)

    get_logger(__name__).info(
        "di_container_initialized",
        max_depth=config.container.max_depth,
        default_shared=config.container.default_shared,
        metrics_enabled=observability.metrics_enabled,
    )
    return container


def get_container() -> Container:
    """Get the global container instance, creating it on first use."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = create_container()
    return _container


def reset_container() -> None:
    """Reset the global container (useful for testing)."""
    global _container
    with _container_lock:
        if _container is not None:
            _container.clear()
        _container = None


def register_instance(key: Key, value: Any, shared: bool = True) -> Container:
    """Bind a key to a value on the global container."""
    return get_container().register_instance(key, value, shared)


def register_template(key: Key, args: Sequence[Any], shared: bool = True) -> Container:
    """Bind a key to literal constructor arguments on the global container."""
    return get_container().register_template(key, args, shared)


def register_factory(
    key: Key, factory: Callable[[ServiceContainer], Any], shared: bool = True
) -> Container:
    """Bind a key to a factory on the global container."""
    return get_container().register_factory(key, factory, shared)


def has(key: Key) -> bool:
    """Return True if the global container knows the key."""
    return get_container().has(key)


def resolve(key: type[T] | Key) -> T:
    """Resolve a key from the global container."""
    return get_container().resolve(key)
