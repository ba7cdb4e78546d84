from collections.abc import AsyncIterator
import contextlib
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from .component_registry import ComponentRegistry
from .config import GatewaySettings
from .enums import ComponentType
from .services.gateway.api import router as gateway_router
from .services.gateway.schemas import ErrorResponse
from .telemetry import instrument_fastapi_app
from .utils.executors import ServiceExecutorFactory


logger = logging.getLogger(__name__)


async def _request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """Report malformed bodies as 400 with the same shape as other client errors."""
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return ORJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error="Invalid request body", message=details).to_payload(),
    )


def _create_base_app(settings: GatewaySettings) -> FastAPI:
    """Create the base FastAPI app with middleware configured."""

    @contextlib.asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("Application startup")
        yield
        logger.info("Application shutdown")
        ServiceExecutorFactory.shutdown()

    app = FastAPI(
        title="Code Review Gateway",
        description="Relays code review prompts to Google Gemini and probes Supabase",
        version="0.1.0",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    instrument_fastapi_app(app)

    return app


def create_app(settings: GatewaySettings, components: dict[ComponentType, object]) -> FastAPI:
    """
    Create the gateway application around already-constructed service handles.

    Args:
        settings: Validated gateway settings
        components: Handle for every ComponentType

    Returns:
        FastAPI: The configured application
    """
    missing = [ctype.value for ctype in ComponentType if ctype not in components]
    if missing:
        msg = f"Missing components: {', '.join(missing)}"
        raise ValueError(msg)

    ServiceExecutorFactory.initialize(settings)
    app = _create_base_app(settings)

    registry = ComponentRegistry()
    for ctype in ComponentType:
        component = components[ctype]
        registry.register(ctype.value, component)

    app.state.registry = registry
    app.state.settings = settings

    app.include_router(gateway_router)
    return app
