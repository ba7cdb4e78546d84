"""
Exception types raised by the gateway and its service handles.
"""


class GatewayError(Exception):
    """Base exception for gateway failures."""


class ClientConstructionError(GatewayError):
    """Raised when an external service handle cannot be created."""

    def __init__(self, component: str, cause: BaseException) -> None:
        super().__init__(f"Failed to initialize {component}: {cause}")
        self.component = component
        self.cause = cause


class GenerationError(GatewayError):
    """Raised when the text generator returns no usable text."""
