"""
carebook ASGI entry point: ``uvicorn carebook.main:app``.
"""

import logging

import sentry_sdk

from carebook.config.settings import get_settings
from carebook.core.app_factory import create_app
from carebook.core.shared import configure_logging

settings = get_settings()
configure_logging(level=settings.LOG_LEVEL, format_type=settings.LOG_FORMAT, sql_echo=settings.DB_ECHO)

logger = logging.getLogger(__name__)

if settings.SENTRY_DSN:
    # Request bodies and user data carry patient details
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        release=f"carebook@{settings.VERSION}",
        send_default_pii=False,
    )
    logger.info("Sentry error reporting enabled")

app = create_app(settings)

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting carebook {settings.VERSION} ({settings.ENVIRONMENT})")
    uvicorn.run("carebook.main:app", host="0.0.0.0", port=8001, reload=settings.DEBUG)
