"""Prometheus metrics for the container."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all container metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Resolution metrics
        self.resolutions_total = Counter(
            "di_resolutions_total",
            "Total number of resolved keys",
            ["source"],  # cache, instance, factory, constructed
            registry=self._registry,
        )

        self.resolution_errors_total = Counter(
            "di_resolution_errors_total",
            "Total number of failed top-level resolutions",
            ["error"],
            registry=self._registry,
        )

        self.resolution_latency_seconds = Histogram(
            "di_resolution_latency_seconds",
            "Top-level resolution latency in seconds",
            buckets=(0.00001, 0.00005, 0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        # Registry metrics
        self.bindings_registered_total = Counter(
            "di_bindings_registered_total",
            "Total number of bindings registered",
            ["kind"],  # instance, template, factory
            registry=self._registry,
        )

        # Cache metrics
        self.cached_instances = Gauge(
            "di_cached_instances",
            "Number of instances held in the shared instance cache",
            registry=self._registry,
        )

        self.info = Info(
            "di_engine",
            "Container information",
            registry=self._registry,
        )


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(
    port: int | None = None, registry: CollectorRegistry | None = None
) -> MetricsRegistry:
    """
    Set up the global metrics registry and, optionally, the Prometheus server.

    Metrics are created once per process; later calls reuse them.

    Args:
        port: Port for the metrics HTTP server (no server if None)
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry(registry)

        from di_engine import __version__
        _metrics.info.info({
            "version": __version__,
        })

    if port is not None:
        start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
