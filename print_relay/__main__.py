"""
Print Relay entry point.

Usage:
    python -m print_relay
    print-relay

Environment variables can be loaded from a .env file in the working
directory.
"""

import logging
import sys

import uvicorn
from dotenv import load_dotenv

from print_relay.config import ConfigurationError, settings_from_env
from print_relay.transport.app import create_app

logger = logging.getLogger("print_relay")


def main() -> int:
    load_dotenv()

    try:
        settings = settings_from_env()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Cannot start print relay: {e}")
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
