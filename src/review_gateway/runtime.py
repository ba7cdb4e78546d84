"""
Runtime entry point for the code review gateway.

This module is invoked via `python -m review_gateway.runtime`
"""

import logging
import signal
import sys
from types import FrameType

from pydantic import ValidationError
import uvicorn

from .app_factory import create_app
from .component_factory import create_components
from .config import format_config_errors, get_settings, validate_settings
from .enums import ServiceEndpoint
from .errors import ClientConstructionError
from .telemetry import setup_tracing


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def setup_signal_handlers(server: uvicorn.Server) -> None:
    """
    Setup shutdown handlers for SIGINT and SIGTERM.

    uvicorn captures signals while serving and re-delivers them here once it
    stops. Executor pools are shut down by the app lifespan, not here.

    Args:
        server: The uvicorn server instance to shutdown
    """

    def signal_handler(signum: int, _frame: FrameType | None) -> None:
        logger.info("Received signal %d, shutting down...", signum)
        server.should_exit = True

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


def main() -> None:
    """
    Main entry point for the gateway.

    Exits with status 1 before binding the port if configuration is invalid or
    either external client cannot be constructed.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    logger.setLevel(settings.log_level)

    check = validate_settings(settings)
    if not check.ok:
        for line in format_config_errors(check):
            logger.error(line)
        sys.exit(1)

    try:
        components = create_components(settings)
    except ClientConstructionError as e:
        logger.error("%s", e)
        sys.exit(1)

    setup_tracing(settings, service_name="review-gateway")

    try:
        app = create_app(settings, components)

        config = uvicorn.Config(
            app,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
            access_log=True,
            server_header=False,
        )
        server = uvicorn.Server(config)
        setup_signal_handlers(server)

        logger.info("=" * 70)
        logger.info("Code Review Gateway - Startup")
        logger.info("=" * 70)
        logger.info("Listen Address: %s:%d", settings.host, settings.port)
        logger.info("Gemini Model: %s", settings.gemini_model)
        logger.info("Supabase Probe Table: %s", settings.supabase_test_table)
        logger.info("Health check: %s%s", settings.base_url, ServiceEndpoint.HEALTH.value)
        logger.info("API test: %s%s", settings.base_url, ServiceEndpoint.API_TEST.value)
        logger.info("Supabase test: %s%s", settings.base_url, ServiceEndpoint.SUPABASE_TEST.value)
        logger.info(
            "Gemini test: POST %s%s", settings.base_url, ServiceEndpoint.GEMINI_TEST.value
        )
        logger.info(
            "Code review: POST %s%s", settings.base_url, ServiceEndpoint.CODE_REVIEW.value
        )
        logger.info("=" * 70)

        server.run()

        logger.info("Gateway shutdown complete")

    except Exception:
        logger.exception("Fatal error during startup")
        sys.exit(1)


if __name__ == "__main__":
    main()
