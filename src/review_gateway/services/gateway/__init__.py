"""
Gateway service module.

Exposes the router and request/response schemas for the gateway.
"""

from .api import router
from .schemas import ReviewRequest, ReviewResponse


__all__ = ["ReviewRequest", "ReviewResponse", "router"]
