"""Container - registers bindings and resolves keys into instances.

The Container ties the domain pieces together:

    - BindingRegistry: how to produce each key, and its lifecycle flag
    - InstanceCache: instances already produced for shared keys
    - ResolutionGuard: cycle detection and depth bound per thread
    - Reflector: constructor introspection (InspectReflector by default)

Resolution of a key:

    1. Cached instance and the key is shared: return it. A template or
       factory registered after the key was materialised does not replace
       the cached instance.
    2. Pick the producer: the registered binding's, or an empty template.
    3. Factory: call it with the container.
       Instance: return the registered value.
       Template: reflect the key's constructor, merge the template's literal
       arguments with resolved dependencies, and construct.
    4. No lifecycle flag recorded: record the default (shared) and cache.
       Shared: cache. Transient: don't.

Usage:
    from di_engine import Container

    container = Container()
    container.register_factory(Clock, lambda c: FixedClock(epoch=0))
    container.register_template(Mailer, ["smtp.example.com"], shared=False)

    service = container.resolve(ReportService)

Thread Safety:
    Registrations may happen from any thread. Resolution of a shared key
    runs under that key's lock, so concurrent first resolutions construct
    the instance once; independent keys do not block each other. Cycles
    raise CircularDependencyError, both within one thread and when two
    threads resolve a cyclic graph from opposite ends.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, Sequence, TypeVar

from di_engine.adapters.outbound.inspect_reflector import InspectReflector
from di_engine.domain.entities import (
    Binding,
    FactoryProducer,
    InstanceProducer,
    Producer,
    TemplateProducer,
)
from di_engine.domain.exceptions import ConstructionError, ResolutionError, UnresolvableTypeError
from di_engine.domain.services import (
    BindingRegistry,
    InstanceCache,
    ResolutionGuard,
    resolve_parameters,
)
from di_engine.domain.value_objects import Key, ParameterDescriptor, key_name
from di_engine.infrastructure.config import ContainerConfig, get_config
from di_engine.infrastructure.metrics import MetricsRegistry
from di_engine.infrastructure.tracing import trace_span
from di_engine.ports.inbound.service_container import ServiceContainer
from di_engine.ports.outbound.reflector import Reflector

T = TypeVar("T")

logger = logging.getLogger(__name__)

_EMPTY_TEMPLATE = TemplateProducer()


class Container:
    """Dependency injection container with constructor autowiring.

    Attributes:
        reflector: The constructor introspection facility in use.
        config: Resolution settings.
    """

    def __init__(
        self,
        reflector: Reflector | None = None,
        config: ContainerConfig | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the container.

        Args:
            reflector: Constructor introspection. Defaults to InspectReflector.
            config: Resolution settings. Defaults to the global configuration.
            metrics: Metrics to record into. Nothing is recorded if None.
        """
        self._reflector: Reflector = reflector or InspectReflector()
        self._config = config or get_config().container
        self._metrics = metrics

        self._registry = BindingRegistry()
        self._cache = InstanceCache()
        self._guard = ResolutionGuard(max_depth=self._config.max_depth)

        self._register_self()

    @property
    def reflector(self) -> Reflector:
        """Return the reflector used for constructor introspection."""
        return self._reflector

    @property
    def config(self) -> ContainerConfig:
        """Return the resolution settings."""
        return self._config

    # =========================================================================
    # Registration
    # =========================================================================

    def register_instance(self, key: Key, value: Any, shared: bool = True) -> Container:
        """Bind a key to an already-constructed value.

        The value is placed in the instance cache immediately, replacing any
        instance materialised earlier for the key.

        Args:
            key: The key to bind.
            value: The value returned for the key.
            shared: Lifecycle flag recorded for the key.

        Returns:
            The container, for chaining.
        """
        self._bind(Binding(key=key, producer=InstanceProducer(value), shared=shared))
        self._cache.store(key, value)
        self._update_cache_gauge()
        return self

    def register_template(self, key: Key, args: Sequence[Any], shared: bool = True) -> Container:
        """Bind a key to literal positional constructor arguments.

        Args:
            key: The key to bind.
            args: Positional arguments merged with resolved dependencies.
            shared: Lifecycle flag recorded for the key.

        Returns:
            The container, for chaining.
        """
        self._bind(Binding(key=key, producer=TemplateProducer(tuple(args)), shared=shared))
        return self

    def register_factory(
        self, key: Key, factory: Callable[[ServiceContainer], Any], shared: bool = True
    ) -> Container:
        """Bind a key to a ``(container) -> instance`` callable.

        Args:
            key: The key to bind.
            factory: Called with this container to produce the value.
            shared: Lifecycle flag recorded for the key.

        Returns:
            The container, for chaining.
        """
        self._bind(Binding(key=key, producer=FactoryProducer(factory), shared=shared))
        return self

    def has(self, key: Key) -> bool:
        """Return True if the key has a binding or a cached instance."""
        return key in self._registry or key in self._cache

    def __contains__(self, key: object) -> bool:
        return self.has(key)

    def _bind(self, binding: Binding) -> None:
        self._registry.register(binding)
        if self._metrics is not None:
            self._metrics.bindings_registered_total.labels(kind=binding.kind.value).inc()
        logger.debug(
            "Registered %s binding for %s (shared=%s)",
            binding.kind.value,
            key_name(binding.key),
            binding.shared,
        )

    def _register_self(self) -> None:
        if not self._config.register_self:
            return
        for key in {Container, type(self), ServiceContainer}:
            self.register_instance(key, self)

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve(self, key: type[T] | Key) -> T:
        """Produce the value for a key.

        Args:
            key: The key to resolve.

        Returns:
            The cached, registered or newly constructed instance.

        Raises:
            UnresolvableTypeError: If the key, or a dependency without a
                default, is not constructible and has no binding.
            CircularDependencyError: If the key depends on itself.
            ResolutionDepthError: If nesting exceeds the configured depth.
            ConstructionError: If a constructor or factory raises.
        """
        if self._guard.depth:
            return self._resolve(key)

        start = time.perf_counter()
        try:
            with trace_span("di.resolve", {"di.key": key_name(key)}):
                instance = self._resolve(key)
        except ResolutionError as e:
            if self._metrics is not None:
                self._metrics.resolution_errors_total.labels(error=type(e).__name__).inc()
            raise

        if self._metrics is not None:
            self._metrics.resolution_latency_seconds.observe(time.perf_counter() - start)
        return instance

    get = resolve

    def resolve_parameters(
        self, args: Sequence[Any], parameters: Sequence[ParameterDescriptor]
    ) -> list[Any]:
        """Merge literal arguments with resolved dependencies.

        Args:
            args: Literal positional arguments.
            parameters: Constructor parameters in declaration order.

        Returns:
            Arguments in constructor order.
        """
        return resolve_parameters(args, parameters, self.resolve, self._reflector.is_instance)

    def _resolve(self, key: Key) -> Any:
        hit, instance = self._shared_instance(key)
        if hit:
            self._count("cache")
            return instance

        with self._guard.entering(key):
            if self._registry.lifecycle(key) is False:
                return self._produce(key)

            with self._cache.building(key):
                hit, instance = self._shared_instance(key)
                if hit:
                    self._count("cache")
                    return instance

                instance = self._produce(key)
                self._write_back(key, instance)
                return instance

    def _shared_instance(self, key: Key) -> tuple[bool, Any]:
        hit, instance = self._cache.lookup(key)
        if hit and self._registry.lifecycle(key):
            return True, instance
        return False, None

    def _produce(self, key: Key) -> Any:
        binding = self._registry.get(key)
        producer: Producer = binding.producer if binding is not None else _EMPTY_TEMPLATE

        if isinstance(producer, InstanceProducer):
            self._count("instance")
            return producer.value

        if isinstance(producer, FactoryProducer):
            instance = self._invoke_factory(key, producer)
            self._count("factory")
            return instance

        instance = self._construct(key, producer.args)
        self._count("constructed")
        return instance

    def _invoke_factory(self, key: Key, producer: FactoryProducer) -> Any:
        try:
            return producer.factory(self)
        except ResolutionError:
            raise
        except Exception as e:
            raise ConstructionError(key, f"factory raised {type(e).__name__}: {e}") from e

    def _construct(self, key: Key, args: Sequence[Any]) -> Any:
        if not self._reflector.is_constructible(key):
            raise UnresolvableTypeError(key)

        parameters = self._reflector.get_constructor_parameters(key)
        if parameters is None:
            arguments: list[Any] = []
            keywords: dict[str, Any] = {}
        else:
            positional = [p for p in parameters if not p.keyword_only]
            arguments = self.resolve_parameters(args, positional)
            keywords = self._resolve_keywords(p for p in parameters if p.keyword_only)

        instance = self._reflector.construct(key, arguments, keywords)
        logger.debug(
            "Constructed %s with %d arguments", key_name(key), len(arguments) + len(keywords)
        )
        return instance

    def _resolve_keywords(self, parameters: Iterable[ParameterDescriptor]) -> dict[str, Any]:
        # Keyword-only parameters with defaults keep them; typed ones without
        # are resolved like positional dependencies.
        return {
            p.name: self.resolve(p.declared_type)
            for p in parameters
            if p.has_declared_type and not p.has_default
        }

    def _write_back(self, key: Key, instance: Any) -> None:
        shared = self._registry.record_default_lifecycle(key, self._config.default_shared)
        if shared:
            self._cache.store(key, instance)
            self._update_cache_gauge()

    # =========================================================================
    # Metrics
    # =========================================================================

    def _count(self, source: str) -> None:
        if self._metrics is not None:
            self._metrics.resolutions_total.labels(source=source).inc()

    def _update_cache_gauge(self) -> None:
        if self._metrics is not None:
            self._metrics.cached_instances.set(len(self._cache))

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def clear(self) -> None:
        """Drop all bindings and cached instances.

        The container binds itself again afterwards when configured to.
        """
        self._registry.clear()
        self._cache.clear()
        self._update_cache_gauge()
        self._register_self()
