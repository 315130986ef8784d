"""Fare engine service entry point."""

import logging
import sys

import uvicorn

from fare_engine.api.app import create_app
from fare_engine.core.exceptions import ConfigurationError
from fare_engine.fare_logging import setup_logging
from fare_engine.settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Load settings, configure logging and serve the HTTP API (blocking)."""
    settings = get_settings()

    setup_logging(
        level=settings.log_level,
        json_output=settings.log_format == "json",
        environment=settings.environment,
    )

    logger.info("Starting fare engine...")
    logger.info("Pricing time zone: %s", settings.pricing.timezone)
    logger.info("Add-ons: %s", ", ".join(sorted(settings.pricing.addon_prices())))

    try:
        app = create_app(settings)
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e.message)
        sys.exit(1)

    uvicorn.run(app, host=settings.api.host, port=settings.api.port, log_config=None)


if __name__ == "__main__":
    main()
