"""Main entry point - runs the API server."""

import logging

import uvicorn

from safe_relay.api.app import create_app
from safe_relay.config import get_settings

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    settings = get_settings()

    # Configure logging
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("Starting Safe Relay...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Chain ID: {settings.chain_id}")

    uvicorn.run(
        create_app(),
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
