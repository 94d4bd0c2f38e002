import asyncio
import logging

from db import create_db_and_tables
from utils.logging_config import setup_logging


def main():
    """Initialize logging and create the storefront tables."""
    setup_logging()
    asyncio.run(create_db_and_tables())
    logging.info("[Startup] Storefront database ready")


if __name__ == '__main__':
    main()
