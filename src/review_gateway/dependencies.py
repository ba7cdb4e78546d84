from collections.abc import Callable
from typing import TypeVar, cast

from fastapi import HTTPException, Request, status

from .component_registry import ComponentRegistry
from .components.data_store import DataStore
from .components.text_generator import TextGenerator
from .config import GatewaySettings, get_settings
from .enums import ComponentType

T = TypeVar("T")


def get_registry(request: Request) -> ComponentRegistry:
    registry = getattr(request.app.state, "registry", None)
    if not registry:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Component registry not initialized",
        )
    return registry


def get_component(name: str, _kind: type[T]) -> Callable[[Request], T]:
    def _get_component(request: Request) -> T:
        component = get_registry(request).get(name)
        if component is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Component {name} not available",
            )
        return cast("T", component)

    return _get_component


get_data_store = get_component(ComponentType.DATA_STORE.value, DataStore)
get_text_generator = get_component(ComponentType.TEXT_GENERATOR.value, TextGenerator)


def get_gateway_settings(request: Request) -> GatewaySettings:
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()
