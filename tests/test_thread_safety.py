"""Tests for thread safety of Registry lookups."""

import threading
from concurrent.futures import ThreadPoolExecutor

from beanwire import Registry
from tests.helpers import constructed


class SlowService:
    pass


class TestConcurrentFirstUse:
    def test_lazy_singleton_is_built_once(self, registry: Registry) -> None:
        """Threads racing on first use all receive the single built instance."""
        built: list[SlowService] = []
        barrier = threading.Barrier(8)
        release = threading.Event()

        def make_service() -> SlowService:
            release.wait(timeout=5)
            service = SlowService()
            built.append(service)
            return service

        registry.register(constructed("slow", make_service, declared_type=SlowService, lazy=True))
        registry.complete_bootstrap()

        def resolve() -> SlowService:
            barrier.wait(timeout=5)
            return registry.get_by_type(SlowService)

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(resolve) for _ in range(8)]
            release.set()
            results = [future.result(timeout=10) for future in futures]

        assert len(built) == 1
        assert all(result is built[0] for result in results)

    def test_transient_builds_per_lookup(self, registry: Registry) -> None:
        registry.register(
            constructed("slow", SlowService, declared_type=SlowService, singleton=False, lazy=True),
        )
        registry.complete_bootstrap()

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: registry.get_by_type(SlowService), range(16)))

        assert len({id(result) for result in results}) == 16

    def test_get_all_of_type_is_consistent_across_threads(self, registry: Registry) -> None:
        for index in range(5):
            registry.register(
                constructed(f"service{index}", SlowService, declared_type=SlowService, lazy=True),
            )
        registry.complete_bootstrap()

        with ThreadPoolExecutor(max_workers=4) as pool:
            snapshots = list(pool.map(lambda _: registry.get_all_of_type(SlowService), range(8)))

        assert all(snapshot == snapshots[0] for snapshot in snapshots)
        assert list(snapshots[0]) == [f"service{index}" for index in range(5)]


class TestConcurrentRegistration:
    def test_concurrent_registration_keeps_every_name(self, registry: Registry) -> None:
        errors: list[Exception] = []

        def register(index: int) -> None:
            try:
                registry.register_instance(f"service{index}", SlowService())
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=register, args=(index,)) for index in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(registry) == 20
