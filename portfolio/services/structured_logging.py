# -*- coding: utf-8 -*-
"""
Structured JSON logging for the portfolio site.

Every line is a JSON object with timestamp, level, logger and message,
the request context when one is active, and any keyword fields handed to
StructuredLogger. Plain text output is available for local development
with PORTFOLIO_LOG_JSON=false.
"""

import json
import logging
from datetime import datetime, timezone

from flask import Flask, has_request_context, request

from portfolio.services.request_context import (
    get_request_context,
    get_request_duration_ms,
    get_request_id,
)

# Paths that would only add noise to the request log
QUIET_PATH_PREFIXES = ('/health', '/static/')

PLAIN_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


class StructuredFormatter(logging.Formatter):
    """Formats log records as JSON or plain text."""

    def __init__(self, json_enabled: bool = True):
        super().__init__(PLAIN_FORMAT)
        self.json_enabled = json_enabled

    def format(self, record: logging.LogRecord) -> str:
        if not self.json_enabled:
            return super().format(record)

        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if has_request_context():
            log_entry.update(
                {k: v for k, v in get_request_context().items() if v is not None}
            )

        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class StructuredLogger:
    """Logger that accepts context as keyword arguments."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _log_with_context(self, level: int, message: str, exc_info=False, **kwargs):
        extra_fields = kwargs.copy()
        if 'request_id' not in extra_fields and has_request_context():
            extra_fields['request_id'] = get_request_id()
        self.logger.log(level, message, exc_info=exc_info, extra={'extra_fields': extra_fields})

    def debug(self, message: str, **kwargs):
        self._log_with_context(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log_with_context(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log_with_context(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log_with_context(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log at ERROR with the active exception's traceback."""
        self._log_with_context(logging.ERROR, message, exc_info=True, **kwargs)

    def log_request_end(self, method: str, path: str, status_code: int, duration_ms: float, **kwargs):
        self.info(
            'request',
            event_type='request_end',
            method=method,
            path=path,
            status=status_code,
            duration_ms=duration_ms,
            **kwargs
        )


def get_logger(name: str) -> StructuredLogger:
    """Get structured logger instance."""
    return StructuredLogger(name)


def configure_logging(app: Flask, json_enabled: bool = True, log_level: str = 'INFO'):
    """Route all logging through one stdout handler with the structured formatter."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(StructuredFormatter(json_enabled=json_enabled))
    root_logger.addHandler(console_handler)

    app.logger.setLevel(level)

    get_logger('portfolio.config').debug(
        'Logging configured',
        json_enabled=json_enabled,
        log_level=log_level,
    )


class LoggingMiddleware:
    """Logs one line per completed request."""

    def __init__(self, app: Flask):
        self.app = app
        self.logger = get_logger('portfolio.requests')
        app.after_request(self._after_request)

    def _after_request(self, response):
        if request.path.startswith(QUIET_PATH_PREFIXES):
            return response

        self.logger.log_request_end(
            method=request.method,
            path=request.path,
            status_code=response.status_code,
            duration_ms=get_request_duration_ms(),
            ip=request.remote_addr,
            user_agent=request.headers.get('User-Agent', ''),
        )
        return response


def init_logging(app: Flask, json_enabled: bool = True, log_level: str = 'INFO'):
    """Initialize structured logging for Flask application."""
    configure_logging(app, json_enabled=json_enabled, log_level=log_level)
    LoggingMiddleware(app)
