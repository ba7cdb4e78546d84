"""
Gateway service API

Relays code review prompts to the text generator and probes the data store.
"""

import logging
import time
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import ORJSONResponse, Response
from prometheus_client import generate_latest

from ...components.data_store import DataStore
from ...components.text_generator import TextGenerator
from ...config import GatewaySettings
from ...dependencies import get_data_store, get_gateway_settings, get_text_generator
from ...enums import ServiceEndpoint
from ...telemetry import error_counter, latency_histogram, request_counter
from .prompts import build_review_prompt
from .schemas import (
    ErrorResponse,
    GeminiTestRequest,
    GeminiTestResponse,
    HealthResponse,
    ReviewRequest,
    ReviewResponse,
    ServiceErrorResponse,
    SupabaseTestResponse,
)


logger = logging.getLogger(__name__)

router = APIRouter()


def _record(route: ServiceEndpoint, outcome: str, start_time: float) -> None:
    latency_histogram.labels(route=route.value).observe(time.time() - start_time)
    request_counter.labels(route=route.value, status=outcome).inc()


def _record_error(route: ServiceEndpoint, error_type: str) -> None:
    error_counter.labels(route=route.value, error_type=error_type).inc()


@router.get(ServiceEndpoint.HEALTH.value, response_model=HealthResponse)
async def health() -> HealthResponse:
    """Static liveness report. Does not contact either upstream service."""
    return HealthResponse()


@router.get(ServiceEndpoint.API_TEST.value)
async def api_test() -> dict[str, str]:
    return {"message": "API is working!"}


@router.get(
    ServiceEndpoint.SUPABASE_TEST.value,
    response_model=SupabaseTestResponse,
    response_model_exclude_none=True,
)
async def supabase_test(
    data_store: Annotated[DataStore, Depends(get_data_store)],
    settings: Annotated[GatewaySettings, Depends(get_gateway_settings)],
) -> SupabaseTestResponse | ORJSONResponse:
    """
    Read one row from the probe table.

    A rejected query still counts as connected and is reported in ``error``.
    """
    route = ServiceEndpoint.SUPABASE_TEST
    start_time = time.time()

    try:
        result = await data_store.probe(settings.supabase_test_table, limit=1)
    except Exception as e:
        logger.exception("Supabase connection test failed")
        _record_error(route, "upstream")
        _record(route, "error", start_time)
        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ServiceErrorResponse(
                message="Supabase connection failed", error=str(e)
            ).to_payload(),
        )

    if result.rejected:
        _record_error(route, "query_rejected")
        _record(route, "degraded", start_time)
        return SupabaseTestResponse(
            message="Supabase connected (no test table found)",
            error=result.error,
        )

    _record(route, "success", start_time)
    return SupabaseTestResponse(message="Supabase connected successfully", data=result.data)


@router.post(
    ServiceEndpoint.GEMINI_TEST.value,
    response_model=GeminiTestResponse,
)
async def gemini_test(
    text_generator: Annotated[TextGenerator, Depends(get_text_generator)],
    payload: GeminiTestRequest | None = None,
) -> GeminiTestResponse | ORJSONResponse:
    """Forward a prompt verbatim and echo the model's answer."""
    route = ServiceEndpoint.GEMINI_TEST
    start_time = time.time()
    payload = payload or GeminiTestRequest()

    try:
        text = await text_generator.generate(payload.prompt)
    except Exception as e:
        logger.warning("Gemini test failed: %s", e)
        _record_error(route, "upstream")
        _record(route, "error", start_time)
        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ServiceErrorResponse(
                message="Google Gemini AI test failed", error=str(e)
            ).to_payload(),
        )

    _record(route, "success", start_time)
    return GeminiTestResponse(prompt=payload.prompt, response=text)


@router.post(
    ServiceEndpoint.CODE_REVIEW.value,
    response_model=ReviewResponse,
)
async def code_review(
    text_generator: Annotated[TextGenerator, Depends(get_text_generator)],
    payload: ReviewRequest | None = None,
) -> ReviewResponse | ORJSONResponse:
    """
    Review a code snippet.

    The model output is returned verbatim; it is not parsed or checked.
    """
    route = ServiceEndpoint.CODE_REVIEW
    start_time = time.time()
    payload = payload or ReviewRequest()

    if not payload.code:
        _record_error(route, "validation")
        _record(route, "client_error", start_time)
        return ORJSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error="Code is required").to_payload(),
        )

    logger.info(
        "Received code review: language=%s, code_chars=%d", payload.language, len(payload.code)
    )
    prompt = build_review_prompt(payload.code, payload.language)

    try:
        review = await text_generator.generate(prompt)
    except Exception as e:
        logger.exception("Code review error")
        _record_error(route, "upstream")
        _record(route, "error", start_time)
        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="Failed to generate code review", message=str(e)
            ).to_payload(),
        )

    _record(route, "success", start_time)
    logger.info("Code review completed: latency=%.3fs", time.time() - start_time)
    return ReviewResponse(review=review, language=payload.language)


@router.get(ServiceEndpoint.METRICS.value, response_class=Response)
@router.head(ServiceEndpoint.METRICS.value, response_class=Response)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
