"""
Main entry point for the OzBargain Deal Notifier.
"""

import asyncio
import sys
from typing import Optional

from .orchestrator import ApplicationOrchestrator
from .services.config_manager import ConfigurationManager
from .utils.logging import get_logger, setup_logging


async def async_main(config_path: Optional[str] = None):
    """Async main application entry point."""
    try:
        config = ConfigurationManager(config_path).load_config()
    except (FileNotFoundError, ValueError) as e:
        setup_logging(log_level="INFO")
        get_logger("main").error("Invalid configuration", extra={"error": str(e)})
        sys.exit(1)

    setup_logging(log_dir=config.log_dir, log_level=config.log_level)
    logger = get_logger("main")

    logger.info(
        "Starting OzBargain Deal Notifier",
        extra={"config_path": config_path, "jobs": [job.name for job in config.jobs]},
    )

    try:
        orchestrator = ApplicationOrchestrator(config)
        await orchestrator.run()

    except Exception as e:
        logger.error("Application failed", extra={"error": str(e)}, exc_info=True)
        sys.exit(1)


def main():
    """Main application entry point."""
    config_path = None

    # Check for config path argument
    if len(sys.argv) > 1:
        config_path = sys.argv[1]

    try:
        asyncio.run(async_main(config_path))
    except KeyboardInterrupt:
        print("\nShutdown requested by user")


if __name__ == "__main__":
    main()
