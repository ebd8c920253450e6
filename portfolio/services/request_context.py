# -*- coding: utf-8 -*-
"""
Request context middleware.

Gives every request an id (reusing a well-formed incoming X-Request-ID),
records its start time and echoes the id back in the response headers so
a page view can be matched with its log lines.
"""

import time
import uuid
from typing import Optional

from flask import Flask, Response, g, request


class RequestContextMiddleware:
    """Middleware for managing request context and request_id propagation."""

    def __init__(self, app: Flask):
        self.app = app
        app.before_request(self._before_request)
        app.after_request(self._after_request)

    def _before_request(self):
        g.request_id = self._get_or_generate_request_id()
        g.request_start_time = time.time()

        g.request_method = request.method
        g.request_path = request.path
        g.request_remote_addr = request.remote_addr
        g.request_user_agent = request.headers.get('User-Agent', '')

    def _after_request(self, response: Response) -> Response:
        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id
        return response

    def _get_or_generate_request_id(self) -> str:
        request_id = request.headers.get('X-Request-ID')
        if request_id:
            try:
                uuid.UUID(request_id)
                return request_id
            except ValueError:
                pass
        return str(uuid.uuid4())


def get_request_id() -> Optional[str]:
    """Get current request_id from Flask g context."""
    return getattr(g, 'request_id', None)


def get_request_duration_ms() -> float:
    start = getattr(g, 'request_start_time', None)
    if start is None:
        return 0.0
    return round((time.time() - start) * 1000, 2)


def get_request_context() -> dict:
    """Get request context for logging."""
    return {
        'request_id': getattr(g, 'request_id', None),
        'method': getattr(g, 'request_method', None),
        'path': getattr(g, 'request_path', None),
        'remote_addr': getattr(g, 'request_remote_addr', None),
        'user_agent': getattr(g, 'request_user_agent', None),
    }


def init_request_context(app: Flask):
    """Initialize request context middleware for Flask application."""
    return RequestContextMiddleware(app)
