import asyncio
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from functools import partial
import logging
from typing import ClassVar, TypeVar

from review_gateway.config import GatewaySettings


logger = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_WORKERS = 4


class ServiceExecutorFactory:
    """Named thread pools for SDK calls that would otherwise block the event loop."""

    _executors: ClassVar[dict[str, ThreadPoolExecutor]] = {}
    _settings: ClassVar[GatewaySettings | None] = None
    _closed: ClassVar[bool] = False

    @classmethod
    def initialize(cls, settings: GatewaySettings) -> None:
        """Bind settings and allow pools to be created again after a shutdown."""
        cls._settings = settings
        cls._closed = False

    @classmethod
    def get_executor(cls, service_name: str) -> ThreadPoolExecutor:
        if service_name not in cls._executors:
            if cls._closed:
                msg = f"Executors have been shut down; refusing to create {service_name}"
                raise RuntimeError(msg)

            if cls._settings is None:
                max_workers = _DEFAULT_WORKERS
                logger.warning(
                    "ServiceExecutorFactory not initialized, using default max_workers=%s",
                    max_workers,
                )
            else:
                max_workers = cls._settings.data_store_workers

            logger.info("Creating executor for %s with max_workers=%s", service_name, max_workers)
            cls._executors[service_name] = ThreadPoolExecutor(
                max_workers=max_workers, thread_name_prefix=f"{service_name}-worker"
            )
        return cls._executors[service_name]

    @classmethod
    async def run_blocking(
        cls,
        service_name: str,
        func: Callable[..., T],
        *args: object,
    ) -> T:
        """
        Run a blocking function in the service's thread pool.

        Raises:
            RuntimeError: If the pools were shut down
        """
        loop = asyncio.get_running_loop()
        executor = cls.get_executor(service_name)
        return await loop.run_in_executor(executor, partial(func, *args))

    @classmethod
    def shutdown(cls) -> None:
        cls._closed = True
        for name, executor in cls._executors.items():
            logger.info("Shutting down executor for %s", name)
            executor.shutdown(wait=True)
        cls._executors.clear()
