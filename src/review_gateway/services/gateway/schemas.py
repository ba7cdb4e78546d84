"""
Pydantic schemas for gateway requests and responses.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from review_gateway.base_schemas import BaseJSONModel
from review_gateway.enums import DEFAULT_LANGUAGE, DEFAULT_TEST_PROMPT


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# === Client schemas ===


class ReviewRequest(BaseJSONModel):
    """Request body for the /api/code-review endpoint."""

    code: str | None = Field(None, description="Source code to review")
    language: str = Field(DEFAULT_LANGUAGE, description="Language of the submitted code")


class ReviewResponse(BaseJSONModel):
    """Successful response from the /api/code-review endpoint."""

    success: bool = Field(True, description="Always true for a completed review")
    review: str = Field(..., description="Review text returned by the model, unmodified")
    language: str = Field(..., description="Language used in the prompt")
    timestamp: str = Field(default_factory=utc_timestamp, description="ISO-8601 UTC time")


class ErrorResponse(BaseJSONModel):
    """Error body for the code review endpoint and request validation failures."""

    error: str = Field(..., description="Short error description")
    message: str | None = Field(None, description="Underlying error message")


class GeminiTestRequest(BaseJSONModel):
    """Request body for the /api/gemini-test endpoint."""

    prompt: str = Field(DEFAULT_TEST_PROMPT, description="Prompt forwarded verbatim")


class GeminiTestResponse(BaseJSONModel):
    """Successful response from the /api/gemini-test endpoint."""

    status: str = "success"
    message: str = "Google Gemini AI working successfully"
    prompt: str
    response: str


class SupabaseTestResponse(BaseJSONModel):
    """Response from the /api/supabase-test endpoint."""

    status: str = "connected"
    message: str
    data: list[dict[str, Any]] | None = None
    error: str | None = None


class ServiceErrorResponse(BaseJSONModel):
    """Error body for the connectivity test endpoints."""

    status: str = "error"
    message: str
    error: str


class ServiceStatus(BaseJSONModel):
    supabase: str = "✅ Connected"
    gemini: str = "✅ Connected"


class HealthResponse(BaseJSONModel):
    """Static liveness report."""

    status: str = "OK"
    message: str = "Server is running"
    services: ServiceStatus = Field(default_factory=ServiceStatus)
