from collections.abc import Callable
import logging

from .components.data_store import DataStore
from .components.text_generator import TextGenerator
from .config import GatewaySettings
from .enums import ComponentType
from .errors import ClientConstructionError


logger = logging.getLogger(__name__)

# Type alias for component factory function
ComponentFactory = Callable[[GatewaySettings], object]


def create_data_store(settings: GatewaySettings) -> DataStore:
    return DataStore.from_settings(settings)


def create_text_generator(settings: GatewaySettings) -> TextGenerator:
    return TextGenerator.from_settings(settings)


COMPONENT_FACTORIES: dict[ComponentType, ComponentFactory] = {
    ComponentType.DATA_STORE: create_data_store,
    ComponentType.TEXT_GENERATOR: create_text_generator,
}


def create_component(component_type: ComponentType | str, settings: GatewaySettings) -> object:
    """
    Construct one external service handle.

    Raises:
        ValueError: If the component type is unknown
        ClientConstructionError: If the underlying SDK constructor fails
    """
    try:
        ctype = ComponentType(component_type)
    except ValueError:
        msg = f"Unknown component type: {component_type}"
        raise ValueError(msg) from None

    factory = COMPONENT_FACTORIES[ctype]
    try:
        return factory(settings)
    except Exception as e:
        logger.exception("Failed to initialize %s", ctype.value)
        raise ClientConstructionError(ctype.value, e) from e


def create_components(settings: GatewaySettings) -> dict[ComponentType, object]:
    """Construct every handle the gateway needs, in a fixed order."""
    return {ctype: create_component(ctype, settings) for ctype in COMPONENT_FACTORIES}
