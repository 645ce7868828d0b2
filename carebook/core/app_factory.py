"""
FastAPI application factory.

Middleware order (outermost first): CORS, request logging. Routes are
mounted under ``API_V1_STR``; ``/health`` sits at the root.
"""

import logging
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from carebook.api.exception_handlers import register_exception_handlers
from carebook.api.middleware.logging_middleware import RequestLoggingMiddleware
from carebook.api.router import api_router
from carebook.config.settings import Settings, get_settings
from carebook.core.lifecycle import lifespan
from carebook.domains.scheduling.application.services.notification_publisher import (
    pending_notification_count,
)

logger = logging.getLogger(__name__)


class AppFactory:
    """Builds the carebook ASGI app one concern at a time."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def create_app(self) -> FastAPI:
        app = self._create_base_app()
        self._configure_middleware(app)
        register_exception_handlers(app)
        app.include_router(api_router, prefix=self._settings.API_V1_STR)
        self._configure_health_endpoint(app)

        logger.info(f"{self._settings.PROJECT_NAME} {self._settings.VERSION} ready ({self._settings.ENVIRONMENT})")
        return app

    def _create_base_app(self) -> FastAPI:
        # Interactive docs only while debugging
        docs_prefix = self._settings.API_V1_STR if self._settings.DEBUG else None
        return FastAPI(
            title=self._settings.PROJECT_NAME,
            description=self._settings.PROJECT_DESCRIPTION,
            version=self._settings.VERSION,
            docs_url=f"{docs_prefix}/docs" if docs_prefix else None,
            redoc_url=f"{docs_prefix}/redoc" if docs_prefix else None,
            lifespan=lifespan,
        )

    def _configure_middleware(self, app: FastAPI) -> None:
        # add_middleware wraps: the last one added runs first
        app.add_middleware(RequestLoggingMiddleware)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._cors_origins(),
            allow_credentials=not self._settings.DEBUG,
            allow_methods=["GET", "POST", "PATCH", "DELETE"],
            allow_headers=["*"],
            expose_headers=[RequestLoggingMiddleware.CORRELATION_HEADER],
        )

    def _configure_health_endpoint(self, app: FastAPI) -> None:
        settings = self._settings

        @app.get("/health", tags=["health"])
        async def health_check() -> dict[str, Any]:
            """Liveness plus the number of notifications still in flight."""
            return {
                "status": "ok",
                "environment": settings.ENVIRONMENT,
                "pending_notifications": pending_notification_count(),
            }

    def _cors_origins(self) -> list[str]:
        if self._settings.DEBUG:
            return ["*"]
        return self._settings.CORS_ORIGINS


def create_app(settings: Settings | None = None) -> FastAPI:
    return AppFactory(settings).create_app()
