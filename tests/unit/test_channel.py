"""Unit tests for ThreadedFetchChannel, executors, and the static source."""

import threading
from concurrent.futures import Future

import pytest

from sitecaps.adapters.channel import ThreadedFetchChannel
from sitecaps.adapters.executor import SynchronousExecutor, ThreadPoolExecutorAdapter
from sitecaps.adapters.source import StaticCapabilitySource
from sitecaps.core.coordinator import FetchCoordinator
from sitecaps.core.exceptions import CapabilitySourceError
from sitecaps.core.models import Capability, FetchResult
from sitecaps.core.ports import (
    CapabilitySourcePort,
    ExecutorPort,
    FetchChannelPort,
)


class ExplodingSource:
    def fetch(self, site_id: int):
        raise RuntimeError("bug in source")


@pytest.mark.channel
@pytest.mark.tra("Adapter.ThreadedFetchChannel")
@pytest.mark.tier(0)
class TestThreadedFetchChannel:
    """Tests for ThreadedFetchChannel with a synchronous executor."""

    def test_satisfies_port(self) -> None:
        channel = ThreadedFetchChannel(StaticCapabilitySource({}), SynchronousExecutor())
        assert isinstance(channel, FetchChannelPort)

    def test_publishes_ok_result_to_subscribers(self) -> None:
        source = StaticCapabilitySource({42: [Capability.SCAN]})
        channel = ThreadedFetchChannel(source, SynchronousExecutor())
        received: list[FetchResult] = []
        channel.register(received.append)

        channel.dispatch(42)

        assert received == [FetchResult.ok(42, [Capability.SCAN])]

    def test_source_error_becomes_error_result(self) -> None:
        channel = ThreadedFetchChannel(StaticCapabilitySource({}), SynchronousExecutor())
        received: list[FetchResult] = []
        channel.register(received.append)

        channel.dispatch(42)

        assert len(received) == 1
        assert received[0].is_error is True
        assert received[0].capabilities is None
        assert "Unknown site 42" in received[0].error

    def test_unexpected_error_still_publishes(self) -> None:
        """A buggy source must not leave the waiter hanging."""
        channel = ThreadedFetchChannel(ExplodingSource(), SynchronousExecutor())
        received: list[FetchResult] = []
        channel.register(received.append)

        channel.dispatch(42)

        assert received[0].is_error is True
        assert "bug in source" in received[0].error

    def test_register_is_idempotent_and_unregister_tolerant(self) -> None:
        channel = ThreadedFetchChannel(StaticCapabilitySource({}), SynchronousExecutor())

        def subscriber(result: FetchResult) -> None:
            pass

        channel.register(subscriber)
        channel.register(subscriber)
        assert channel.subscriber_count == 1

        channel.unregister(subscriber)
        channel.unregister(subscriber)
        assert channel.subscriber_count == 0

    def test_unregistered_subscriber_gets_nothing(self) -> None:
        source = StaticCapabilitySource({42: []})
        channel = ThreadedFetchChannel(source, SynchronousExecutor())
        received: list[FetchResult] = []
        channel.register(received.append)
        channel.unregister(received.append)

        channel.dispatch(42)

        assert received == []

    def test_refused_submit_publishes_error_result(self) -> None:
        executor = ThreadPoolExecutorAdapter(max_workers=1)
        executor.shutdown()
        channel = ThreadedFetchChannel(StaticCapabilitySource({42: []}), executor)
        received: list[FetchResult] = []
        channel.register(received.append)

        channel.dispatch(42)

        assert len(received) == 1
        assert received[0].site_id == 42
        assert received[0].is_error

    def test_coordinator_with_synchronous_delivery(self) -> None:
        """Delivery before dispatch() returns still resolves the future."""
        source = StaticCapabilitySource({42: [Capability.BACKUP]})
        channel = ThreadedFetchChannel(source, SynchronousExecutor())
        coordinator = FetchCoordinator(channel)

        future = coordinator.begin_fetch(42)

        assert future.result(timeout=0).capabilities == {Capability.BACKUP}
        assert coordinator.in_flight is False
        assert channel.subscriber_count == 0


@pytest.mark.channel
@pytest.mark.tra("Adapter.ThreadedFetchChannel")
@pytest.mark.tier(1)
class TestThreadedDelivery:
    """Tests for delivery from a real worker thread."""

    def test_result_delivered_on_worker_thread(self) -> None:
        source = StaticCapabilitySource({42: [Capability.SCAN]})
        threads: list[str] = []
        done = threading.Event()

        def subscriber(result: FetchResult) -> None:
            threads.append(threading.current_thread().name)
            done.set()

        with ThreadPoolExecutorAdapter(max_workers=1) as executor:
            channel = ThreadedFetchChannel(source, executor)
            channel.register(subscriber)
            channel.dispatch(42)
            assert done.wait(timeout=5)

        assert threads[0].startswith("sitecaps-fetch")
        assert threads[0] != threading.current_thread().name

    def test_coordinator_resolves_from_worker(self) -> None:
        source = StaticCapabilitySource({42: [Capability.SCAN]})
        with ThreadPoolExecutorAdapter(max_workers=1) as executor:
            coordinator = FetchCoordinator(ThreadedFetchChannel(source, executor))
            result = coordinator.begin_fetch(42).result(timeout=5)

        assert result.capabilities == {Capability.SCAN}


@pytest.mark.channel
@pytest.mark.tra("Adapter.Executor")
@pytest.mark.tier(0)
class TestExecutors:
    """Tests for executor adapters."""

    def test_synchronous_executor_returns_completed_future(self) -> None:
        future = SynchronousExecutor().submit(lambda x: x * 2, 21)
        assert isinstance(future, Future)
        assert future.result(timeout=0) == 42

    def test_synchronous_executor_captures_exception(self) -> None:
        def boom() -> None:
            raise ValueError("nope")

        future = SynchronousExecutor().submit(boom)
        assert isinstance(future.exception(timeout=0), ValueError)

    def test_synchronous_executor_context_and_shutdown_are_noops(self) -> None:
        with SynchronousExecutor() as executor:
            executor.shutdown()
            assert executor.submit(len, "abc").result(timeout=0) == 3

    def test_executors_satisfy_port(self) -> None:
        assert isinstance(SynchronousExecutor(), ExecutorPort)
        with ThreadPoolExecutorAdapter(max_workers=1) as executor:
            assert isinstance(executor, ExecutorPort)
            assert executor.submit(sum, [1, 2]).result(timeout=5) == 3


@pytest.mark.channel
@pytest.mark.tra("Adapter.StaticCapabilitySource")
@pytest.mark.tier(0)
class TestStaticCapabilitySource:
    """Tests for StaticCapabilitySource."""

    def test_satisfies_port(self) -> None:
        assert isinstance(StaticCapabilitySource({}), CapabilitySourcePort)

    def test_known_site(self) -> None:
        source = StaticCapabilitySource({42: [Capability.SCAN, Capability.SCAN]})
        assert source.fetch(42) == {Capability.SCAN}

    def test_unknown_site_raises_404_style_error(self) -> None:
        with pytest.raises(CapabilitySourceError) as exc_info:
            StaticCapabilitySource({}).fetch(42)

        assert exc_info.value.status_code == 404
        assert exc_info.value.recovery_hint == "Verify that site 42 exists"
