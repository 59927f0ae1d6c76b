#!/usr/bin/env python3
"""
Treasury Simulator Entry Point

Starts the FastAPI server with the seeded treasury accounts.
"""

import sys

import uvicorn

from treasury_sim.api import create_app
from treasury_sim.config import get_config
from treasury_sim.logging_config import setup_logging


def main():
    config = get_config()
    logger = setup_logging(config.log_level, config.log_format)
    logger.info(f"Starting treasury simulator on {config.api_host}:{config.api_port}")

    try:
        uvicorn.run(
            create_app(),
            host=config.api_host,
            port=config.api_port,
            access_log=False
        )
    except KeyboardInterrupt:
        logger.info("Shutting down treasury simulator")
    except Exception as e:
        logger.error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
