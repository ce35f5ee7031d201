import logging

import sentry_sdk

from app.core.config import settings

logger = logging.getLogger(__name__)

def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

def init_sentry() -> bool:
    """
    Initialise Sentry error reporting.

    Only enabled when a DSN is configured and the service runs in production.
    Returns whether reporting was enabled.
    """
    if not settings.SENTRY_DSN or settings.ENVIRONMENT != "production":
        logger.info("Sentry disabled")
        return False

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT or settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        attach_stacktrace=True,
        send_default_pii=False,
    )
    logger.info(f"Sentry enabled for environment {settings.SENTRY_ENVIRONMENT or settings.ENVIRONMENT}")
    return True
