"""
Tests for the component factory module.

Tests cover:
- Creating each external service handle
- Wrapping SDK constructor failures
- Error handling for unknown component types
"""

from unittest.mock import MagicMock, patch

import pytest

from review_gateway.component_factory import (
    COMPONENT_FACTORIES,
    create_component,
    create_components,
    create_data_store,
    create_text_generator,
)
from review_gateway.config import GatewaySettings
from review_gateway.enums import ComponentType
from review_gateway.errors import ClientConstructionError


@pytest.fixture
def settings() -> GatewaySettings:
    """Create test settings."""
    return GatewaySettings(
        _env_file=None,
        SUPABASE_URL="https://abc.supabase.co",
        SUPABASE_SERVICE_ROLE_KEY="service-role-key",
        GOOGLE_GEMINI_API_KEY="gemini-api-key",
    )


class TestComponentFactories:
    """Test individual component factory functions."""

    @patch("review_gateway.component_factory.DataStore")
    def test_create_data_store(self, mock_class: MagicMock, settings: GatewaySettings) -> None:
        result = create_data_store(settings)

        mock_class.from_settings.assert_called_once_with(settings)
        assert result == mock_class.from_settings.return_value

    @patch("review_gateway.component_factory.TextGenerator")
    def test_create_text_generator(
        self, mock_class: MagicMock, settings: GatewaySettings
    ) -> None:
        result = create_text_generator(settings)

        mock_class.from_settings.assert_called_once_with(settings)
        assert result == mock_class.from_settings.return_value

    def test_every_component_type_has_factory(self) -> None:
        assert set(COMPONENT_FACTORIES) == set(ComponentType)


class TestCreateComponent:
    """Tests for create_component and create_components."""

    def test_string_type_resolves(self, settings: GatewaySettings) -> None:
        factory = MagicMock(return_value="handle")
        with patch.dict(COMPONENT_FACTORIES, {ComponentType.DATA_STORE: factory}):
            assert create_component("data_store", settings) == "handle"

    def test_unknown_type_raises(self, settings: GatewaySettings) -> None:
        with pytest.raises(ValueError, match="Unknown component type"):
            create_component("vector_store", settings)

    def test_constructor_failure_is_wrapped(self, settings: GatewaySettings) -> None:
        factory = MagicMock(side_effect=RuntimeError("Invalid URL"))
        with patch.dict(COMPONENT_FACTORIES, {ComponentType.DATA_STORE: factory}):
            with pytest.raises(ClientConstructionError) as exc_info:
                create_component(ComponentType.DATA_STORE, settings)

        assert exc_info.value.component == "data_store"
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert "Invalid URL" in str(exc_info.value)

    def test_create_components_builds_all(self, settings: GatewaySettings) -> None:
        store, generator = MagicMock(), MagicMock()
        with patch.dict(
            COMPONENT_FACTORIES,
            {
                ComponentType.DATA_STORE: MagicMock(return_value=store),
                ComponentType.TEXT_GENERATOR: MagicMock(return_value=generator),
            },
        ):
            components = create_components(settings)

        assert components == {
            ComponentType.DATA_STORE: store,
            ComponentType.TEXT_GENERATOR: generator,
        }
