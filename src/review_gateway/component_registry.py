import logging


logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Holds the service handles shared by every request."""

    def __init__(self) -> None:
        self._components: dict[str, object] = {}

    def register(self, name: str, component: object) -> None:
        if name in self._components:
            msg = f"Component {name} already registered"
            raise ValueError(msg)

        logger.info("Registering component: %s (%s)", name, type(component).__name__)
        self._components[name] = component

    def get(self, name: str) -> object:
        return self._components.get(name)
