"""
Tests for the ServiceExecutorFactory.
"""

import threading

import pytest

from review_gateway.config import GatewaySettings
from review_gateway.utils.executors import ServiceExecutorFactory


@pytest.fixture(autouse=True)
def reset_factory():
    ServiceExecutorFactory.shutdown()
    ServiceExecutorFactory._settings = None
    ServiceExecutorFactory._closed = False
    yield
    ServiceExecutorFactory.shutdown()
    ServiceExecutorFactory._settings = None
    ServiceExecutorFactory._closed = False


class TestServiceExecutorFactory:
    """Tests for executor creation and reuse."""

    def test_uses_configured_worker_count(self) -> None:
        ServiceExecutorFactory.initialize(GatewaySettings(_env_file=None, DATA_STORE_WORKERS=2))

        executor = ServiceExecutorFactory.get_executor("data-store")

        assert executor._max_workers == 2

    def test_executor_is_reused(self) -> None:
        first = ServiceExecutorFactory.get_executor("data-store")
        second = ServiceExecutorFactory.get_executor("data-store")

        assert first is second

    @pytest.mark.asyncio
    async def test_run_blocking_off_event_loop(self) -> None:
        loop_thread = threading.get_ident()

        def work(value: int) -> tuple[int, int]:
            return value * 2, threading.get_ident()

        result, worker_thread = await ServiceExecutorFactory.run_blocking("data-store", work, 21)

        assert result == 42
        assert worker_thread != loop_thread

    def test_shutdown_clears_executors(self) -> None:
        ServiceExecutorFactory.get_executor("data-store")

        ServiceExecutorFactory.shutdown()

        assert ServiceExecutorFactory._executors == {}

    def test_refuses_new_executor_after_shutdown(self) -> None:
        ServiceExecutorFactory.shutdown()

        with pytest.raises(RuntimeError, match="shut down"):
            ServiceExecutorFactory.get_executor("data-store")

    def test_initialize_reopens(self) -> None:
        ServiceExecutorFactory.shutdown()
        ServiceExecutorFactory.initialize(GatewaySettings(_env_file=None))

        assert ServiceExecutorFactory.get_executor("data-store") is not None
