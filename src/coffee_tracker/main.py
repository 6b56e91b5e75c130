"""Run the coffee tracker API: `coffee-tracker` or `python -m coffee_tracker.main`."""

import structlog

from coffee_tracker.app import App
from coffee_tracker.config import Config
from coffee_tracker.logging import setup_logging
from coffee_tracker.web.runner import run_server

logger = structlog.get_logger(__name__)


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    logger.info(
        "coffee_tracker_starting",
        host=config.host,
        port=config.port,
        retention_hours=config.session_expiration_hours,
        cleanup_interval_hours=config.cleanup_interval_hours,
    )
    run_server(App(config), config)


if __name__ == "__main__":
    main()
