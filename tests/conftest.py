"""Pytest configuration and fixtures for di_engine tests."""

from __future__ import annotations

from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from di_engine.adapters.outbound import TableReflector
from di_engine.application.container import Container
from di_engine.infrastructure.config import ContainerConfig
from di_engine.infrastructure.container import reset_container
from di_engine.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def container_config() -> ContainerConfig:
    """Provide default resolution settings, independent of the environment."""
    return ContainerConfig()


@pytest.fixture
def container(container_config: ContainerConfig) -> Generator[Container, None, None]:
    """Provide a fresh DI container for each test."""
    reset_container()
    c = Container(config=container_config)
    yield c
    c.clear()


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def table_reflector() -> TableReflector:
    """Provide an empty descriptor-table reflector."""
    return TableReflector()


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
