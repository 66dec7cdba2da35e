"""Unit tests for BindingRegistry and InstanceCache."""

from __future__ import annotations

import threading

import pytest

from di_engine.domain.entities import (
    Binding,
    FactoryProducer,
    InstanceProducer,
    ProducerKind,
    TemplateProducer,
)
from di_engine.domain.exceptions import CircularDependencyError
from di_engine.domain.services import BindingRegistry, InstanceCache


@pytest.mark.unit
class TestBindingRegistry:
    """Tests for the binding registry."""

    @pytest.fixture
    def registry(self) -> BindingRegistry:
        """Create an empty registry."""
        return BindingRegistry()

    def test_register_and_get(self, registry: BindingRegistry) -> None:
        """A registered binding can be read back."""
        binding = Binding(key="Clock", producer=TemplateProducer(("utc",)))

        previous = registry.register(binding)

        assert previous is None
        assert registry.get("Clock") is binding
        assert "Clock" in registry
        assert len(registry) == 1

    def test_register_records_lifecycle(self, registry: BindingRegistry) -> None:
        """The binding's shared flag becomes the key's lifecycle."""
        registry.register(Binding(key="Clock", producer=TemplateProducer(), shared=False))

        assert registry.lifecycle("Clock") is False

    def test_reregistration_replaces_binding(self, registry: BindingRegistry) -> None:
        """Last write wins; the old producer is gone."""
        first = Binding(key="Clock", producer=InstanceProducer(1))
        second = Binding(key="Clock", producer=FactoryProducer(lambda c: 2), shared=False)

        registry.register(first)
        previous = registry.register(second)

        assert previous is first
        assert registry.get("Clock") is second
        assert registry.get("Clock").kind is ProducerKind.FACTORY
        assert registry.lifecycle("Clock") is False
        assert len(registry) == 1

    def test_unknown_key(self, registry: BindingRegistry) -> None:
        """Unknown keys have no binding and no lifecycle."""
        assert registry.get("Missing") is None
        assert registry.lifecycle("Missing") is None
        assert "Missing" not in registry

    def test_default_lifecycle_recorded_once(self, registry: BindingRegistry) -> None:
        """The first recorded flag sticks."""
        assert registry.record_default_lifecycle("Clock", True) is True
        assert registry.record_default_lifecycle("Clock", False) is True
        assert registry.lifecycle("Clock") is True

    def test_default_lifecycle_respects_registration(self, registry: BindingRegistry) -> None:
        """A registered flag is not overridden by the default."""
        registry.register(Binding(key="Clock", producer=TemplateProducer(), shared=False))

        assert registry.record_default_lifecycle("Clock", True) is False

    def test_clear(self, registry: BindingRegistry) -> None:
        """Clear drops bindings and flags."""
        registry.register(Binding(key="Clock", producer=TemplateProducer()))
        registry.clear()

        assert len(registry) == 0
        assert registry.lifecycle("Clock") is None

    def test_iteration_lists_keys(self, registry: BindingRegistry) -> None:
        """Iterating yields registered keys."""
        registry.register(Binding(key="A", producer=TemplateProducer()))
        registry.register(Binding(key="B", producer=TemplateProducer()))

        assert sorted(registry) == ["A", "B"]


@pytest.mark.unit
class TestInstanceCache:
    """Tests for the instance cache."""

    @pytest.fixture
    def cache(self) -> InstanceCache:
        """Create an empty cache."""
        return InstanceCache()

    def test_miss(self, cache: InstanceCache) -> None:
        """Lookup of an unknown key misses."""
        assert cache.lookup("Clock") == (False, None)

    def test_store_and_lookup(self, cache: InstanceCache) -> None:
        """Stored instances are returned by identity."""
        instance = object()
        cache.store("Clock", instance)

        hit, value = cache.lookup("Clock")

        assert hit is True
        assert value is instance
        assert "Clock" in cache

    def test_none_is_cacheable(self, cache: InstanceCache) -> None:
        """A cached None is a hit, not a miss."""
        cache.store("Nothing", None)

        assert cache.lookup("Nothing") == (True, None)

    def test_lock_per_key(self, cache: InstanceCache) -> None:
        """Each key gets one stable lock; different keys get different locks."""
        lock_a = cache.lock_for("A")

        assert cache.lock_for("A") is lock_a
        assert cache.lock_for("B") is not lock_a

    def test_key_lock_is_reentrant(self, cache: InstanceCache) -> None:
        """The same thread can take a key lock twice."""
        lock = cache.lock_for("A")

        with lock:
            assert lock.acquire(blocking=False) is True
            lock.release()

    def test_independent_keys_do_not_block(self, cache: InstanceCache) -> None:
        """Holding one key's lock does not block another key."""
        acquired = threading.Event()

        def take_b() -> None:
            with cache.lock_for("B"):
                acquired.set()

        with cache.lock_for("A"):
            worker = threading.Thread(target=take_b)
            worker.start()
            assert acquired.wait(timeout=2.0)
            worker.join()

    def test_building_waits_for_current_builder(self, cache: InstanceCache) -> None:
        """A second thread building the same key waits, it does not fail."""
        entered = threading.Event()

        def build_a() -> None:
            with cache.building("A"):
                entered.set()

        with cache.building("A"):
            worker = threading.Thread(target=build_a)
            worker.start()
            assert not entered.wait(timeout=0.1)

        worker.join(timeout=2.0)
        assert not worker.is_alive()
        assert entered.is_set()

    def test_crossed_builds_raise_instead_of_blocking(self, cache: InstanceCache) -> None:
        """Two threads each waiting on the key the other builds: one fails."""
        holding = threading.Barrier(2)
        errors: list[CircularDependencyError] = []

        def build(first: str, second: str) -> None:
            try:
                with cache.building(first):
                    holding.wait(timeout=2.0)
                    with cache.building(second):
                        pass
            except CircularDependencyError as e:
                errors.append(e)

        threads = [
            threading.Thread(target=build, args=("A", "B")),
            threading.Thread(target=build, args=("B", "A")),
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=2.0)

        assert not any(thread.is_alive() for thread in threads)
        assert len(errors) == 1
        assert errors[0].chain in {("A", "B", "A"), ("B", "A", "B")}

    def test_clear(self, cache: InstanceCache) -> None:
        """Clear empties the cache."""
        cache.store("A", 1)
        cache.clear()

        assert len(cache) == 0
