"""
Enumerations and constants for the code review gateway.
"""

from enum import Enum


class ServiceEndpoint(str, Enum):
    """API endpoints exposed by the gateway."""

    HEALTH = "/health"
    METRICS = "/metrics"
    API_TEST = "/api/test"
    SUPABASE_TEST = "/api/supabase-test"
    GEMINI_TEST = "/api/gemini-test"
    CODE_REVIEW = "/api/code-review"


class ComponentType(str, Enum):
    """External service handles held by the gateway."""

    DATA_STORE = "data_store"
    TEXT_GENERATOR = "text_generator"


class UpstreamService(str, Enum):
    """Label values for upstream calls in metrics and spans."""

    SUPABASE = "supabase"
    GEMINI = "gemini"


DEFAULT_LANGUAGE = "javascript"
DEFAULT_TEST_PROMPT = "Hello, how are you?"
