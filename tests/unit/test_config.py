"""Unit tests for configuration module."""

from __future__ import annotations

import pytest

from di_engine.infrastructure.config import (
    Config,
    ContainerConfig,
    ObservabilityConfig,
    get_config,
)


@pytest.mark.unit
class TestConfig:
    """Tests for Config class."""

    def test_default_config(self) -> None:
        """Test default configuration values."""
        config = Config()

        assert config.container.default_shared is True
        assert config.container.max_depth == 64
        assert config.container.register_self is True
        assert config.observability.log_format == "json"
        assert config.observability.metrics_enabled is False
        assert config.observability.metrics_port is None

    def test_custom_container_config(self) -> None:
        """Test custom container configuration."""
        container = ContainerConfig(default_shared=False, max_depth=8, register_self=False)

        assert container.default_shared is False
        assert container.max_depth == 8
        assert container.register_self is False

    def test_invalid_max_depth(self) -> None:
        """Test that a non-positive depth raises validation error."""
        with pytest.raises(ValueError):
            ContainerConfig(max_depth=0)

    def test_log_formats(self) -> None:
        """Test valid log formats."""
        for log_format in ["json", "console"]:
            observability = ObservabilityConfig(log_format=log_format)  # type: ignore
            assert observability.log_format == log_format

    def test_invalid_log_level(self) -> None:
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValueError):
            ObservabilityConfig(log_level="VERBOSE")  # type: ignore

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Nested settings are read from DI_ENGINE_ prefixed variables."""
        monkeypatch.setenv("DI_ENGINE_CONTAINER__MAX_DEPTH", "12")
        monkeypatch.setenv("DI_ENGINE_CONTAINER__DEFAULT_SHARED", "false")

        config = Config()

        assert config.container.max_depth == 12
        assert config.container.default_shared is False


@pytest.mark.unit
class TestConfigSingleton:
    """Tests for get_config singleton."""

    def test_get_config_returns_same_instance(self) -> None:
        """Test that get_config returns the same instance."""
        config1 = get_config()
        config2 = get_config()
        assert config1 is config2
