"""
Startup and shutdown hooks (FastAPI lifespan).

Shutdown order matters: notifications still in flight may write through the
database dispatcher, so they are drained before the engine is disposed.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from carebook.config.settings import Settings, get_settings
from carebook.database.async_db import check_database_connection, dispose_engine
from carebook.domains.scheduling.application.services.notification_publisher import (
    drain_pending_notifications,
)

logger = logging.getLogger(__name__)


class LifecycleManager:
    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    async def startup(self) -> None:
        if self._started:
            logger.warning("Lifecycle already started")
            return

        self._log_runtime_settings()
        if await check_database_connection():
            s = self._settings
            logger.info(f"Database reachable at {s.DB_HOST}:{s.DB_PORT}/{s.DB_NAME}")
        else:
            # Start anyway; requests fail with 500 until the database is back
            logger.error("Database is not reachable")

        self._started = True

    async def shutdown(self) -> None:
        if not self._started:
            return

        await drain_pending_notifications(timeout=self._settings.NOTIFICATION_DRAIN_TIMEOUT)
        await dispose_engine()
        self._started = False
        logger.info("Shutdown complete")

    def _log_runtime_settings(self) -> None:
        s = self._settings
        logger.info(f"Environment: {s.ENVIRONMENT} (debug={s.DEBUG})")
        if s.NOTIFICATIONS_ENABLED:
            logger.info(f"Appointment notifications via '{s.NOTIFICATION_BACKEND}' backend")
        else:
            logger.info("Appointment notifications disabled")
        if not s.SENTRY_DSN:
            logger.info("SENTRY_DSN not set, error reporting disabled")


_lifecycle_manager: LifecycleManager | None = None


def get_lifecycle_manager() -> LifecycleManager:
    global _lifecycle_manager
    if _lifecycle_manager is None:
        _lifecycle_manager = LifecycleManager()
    return _lifecycle_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    lifecycle = get_lifecycle_manager()
    await lifecycle.startup()
    try:
        yield
    finally:
        await lifecycle.shutdown()
