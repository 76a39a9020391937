"""Tests for thread safety of Container."""

import threading
import time

from entrywire.container import Container
from entrywire.lock_mode import LockMode


class SlowService:
    created = 0

    def __init__(self) -> None:
        time.sleep(0.01)
        SlowService.created += 1


class DependentService:
    def __init__(self, service: SlowService) -> None:
        self.service = service


class TestConcurrentResolution:
    def test_concurrent_resolve_returns_same_instance(self) -> None:
        """Concurrent resolution of one identifier builds it exactly once."""
        SlowService.created = 0
        container = Container(lock_mode=LockMode.THREAD)
        container.register("service", SlowService)
        results: list[SlowService] = []
        errors: list[Exception] = []

        def resolve_service() -> None:
            try:
                results.append(container.resolve("service"))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=resolve_service) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(results) == 10
        assert all(r is results[0] for r in results)
        assert SlowService.created == 1

    def test_concurrent_autowired_dependencies_share_instance(self) -> None:
        """Concurrent autowiring resolves shared dependencies once."""
        SlowService.created = 0
        container = Container(autowiring=True, lock_mode=LockMode.THREAD)
        results: list[DependentService] = []
        errors: list[Exception] = []

        def make_service() -> None:
            try:
                results.append(container.make(DependentService))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=make_service) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len({id(r) for r in results}) == 10
        assert all(r.service is results[0].service for r in results)
        assert SlowService.created == 1

    def test_concurrent_registration(self) -> None:
        """Concurrent registrations are all kept."""
        container = Container(lock_mode=LockMode.THREAD)

        def register(index: int) -> None:
            container.register(f"entry-{index}", index)

        threads = [threading.Thread(target=register, args=(i,)) for i in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(container.fetch_raw(f"entry-{i}") == i for i in range(20))

    def test_lock_is_reentrant_for_nested_resolution(self) -> None:
        """Nested resolution under the thread lock does not deadlock."""
        container = Container(lock_mode=LockMode.THREAD)
        container.register(SlowService, SlowService)
        container.register("dependent", DependentService)

        assert isinstance(container.resolve("dependent").service, SlowService)
