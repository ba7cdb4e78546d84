"""
Data store handle backed by Supabase.

Only a bounded read is exercised; it is used to confirm the project is reachable.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import TYPE_CHECKING, Any

from postgrest.exceptions import APIError
from supabase import create_client

from ..enums import UpstreamService
from ..telemetry import upstream_duration_histogram, upstream_span
from ..utils.executors import ServiceExecutorFactory

if TYPE_CHECKING:
    from ..config import GatewaySettings


logger = logging.getLogger(__name__)

EXECUTOR_NAME = "data-store"


@dataclass
class ProbeResult:
    """Rows returned by a probe, or the reason the query failed."""

    data: list[dict[str, Any]] | None = None
    error: str | None = None

    @property
    def rejected(self) -> bool:
        return self.error is not None


def _api_error_message(exc: APIError) -> str:
    message = getattr(exc, "message", None)
    return str(message) if message else str(exc)


class DataStore:
    """
    Read-only access to a Supabase project.

    The Supabase client is synchronous, so queries run on a dedicated executor.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: GatewaySettings) -> DataStore:
        """Build a data store with a real Supabase client."""
        client = create_client(settings.supabase_url, settings.supabase_service_role_key)
        logger.info("Supabase client initialized")
        return cls(client)

    def _select(self, table: str, limit: int) -> ProbeResult:
        """
        Run the query on a worker thread.

        Every failure of the query call, whether PostgREST rejected it or the
        request never reached the server, is reported in the result.
        """
        try:
            response = self._client.table(table).select("*").limit(limit).execute()
        except APIError as e:
            logger.warning("Supabase query on table %s rejected: %s", table, e)
            return ProbeResult(error=_api_error_message(e))
        except Exception as e:
            logger.warning("Supabase query on table %s failed: %s", table, e)
            return ProbeResult(error=str(e) or type(e).__name__)
        return ProbeResult(data=list(response.data or []))

    async def probe(self, table: str, limit: int = 1) -> ProbeResult:
        """
        Read at most ``limit`` rows from ``table``.

        Query failures come back in ``ProbeResult.error``. Only failures outside
        the query itself, such as the executor being shut down, are raised.
        """
        start_time = time.time()
        try:
            with upstream_span(UpstreamService.SUPABASE.value, "select") as span:
                span.set_attribute("gateway.table", table)
                result = await ServiceExecutorFactory.run_blocking(
                    EXECUTOR_NAME, self._select, table, limit
                )
                span.set_attribute("gateway.query_failed", result.rejected)
        finally:
            upstream_duration_histogram.labels(service=UpstreamService.SUPABASE.value).observe(
                time.time() - start_time
            )

        return result
