"""Shared logging utilities for FastAPI applications."""

import logging

import common.settings

APP_LOGGER_NAME = 'portfolio'


class HealthCheckFilter(logging.Filter):
    """Filter out health check requests from uvicorn access logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Return False to suppress health check log entries."""
        return '/health' not in record.getMessage()


def configure_logging(level: str | None = None) -> None:
    """Configure uvicorn access logging and the application log level.

    Health check entries are dropped from uvicorn's access log. The level of the
    ``portfolio`` logger hierarchy defaults to ``common.settings.LOG_LEVEL``.
    """
    logging.getLogger('uvicorn.access').addFilter(HealthCheckFilter())
    logging.getLogger(APP_LOGGER_NAME).setLevel(level or common.settings.LOG_LEVEL)
