"""
Application lifecycle event handlers.

Manages startup and shutdown tasks: logging setup and database
connections.
"""

from typing import Callable

import structlog
from fastapi import FastAPI

from core.config import settings
from core.logging import configure_logging
from db.session import close_db, init_db

logger = structlog.get_logger(__name__)


def create_start_app_handler(app: FastAPI) -> Callable:
    """Create startup event handler."""

    async def start_app() -> None:
        configure_logging()
        logger.info("app_starting", app_name=settings.APP_NAME, env=settings.APP_ENV)

        await init_db()

        if settings.ADMIN_API_KEY == "change-me" and settings.APP_ENV == "production":
            logger.warning("admin_api_key_default", hint="set ADMIN_API_KEY")

        logger.info("app_started")

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    """Create shutdown event handler."""

    async def stop_app() -> None:
        logger.info("app_stopping")
        await close_db()
        logger.info("app_stopped")

    return stop_app
