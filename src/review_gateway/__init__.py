"""
Code review gateway for Google Gemini and Supabase.
"""

from .config import ConfigCheck, GatewaySettings, get_settings, validate_settings
from .enums import ComponentType, ServiceEndpoint


__version__ = "0.1.0"

__all__ = [
    "ComponentType",
    "ConfigCheck",
    "GatewaySettings",
    "ServiceEndpoint",
    "get_settings",
    "validate_settings",
]
