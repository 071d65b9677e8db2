"""
Users API Entry Point

Allows execution via: python -m services.api (or the `users-api` script)

Configures logging, ensures the users table exists, then serves the API
with uvicorn until interrupted.
"""

import logging
import sys

import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from services.api.app import create_app
from utils.config import settings
from utils.db import get_engine, wait_for_schema
from utils.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point for the users API."""
    setup_logging(level=settings.LOG_LEVEL, format_type=settings.LOG_FORMAT)

    engine = get_engine(settings.DATABASE_URL)

    try:
        wait_for_schema(engine)
    except SQLAlchemyError as e:
        logger.error("Database initialization failed: %s", str(e), exc_info=True)
        sys.exit(1)

    app = create_app(settings, engine=engine)

    logger.info("Starting %s on %s:%d", settings.APP_NAME, settings.API_HOST, settings.API_PORT)
    try:
        uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT, log_config=None)
    finally:
        engine.dispose()
        logger.info("Database engine disposed")


if __name__ == "__main__":
    main()
