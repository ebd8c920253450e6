# -*- coding: utf-8 -*-
"""
Request size limits.

Form endpoints accept at most 32 KiB of encoded body; everything else is
capped by MAX_CONTENT_LENGTH. Oversized bodies are rejected before the
view runs, so field validation never sees them.
"""
from typing import Optional

from flask import Flask, request
from werkzeug.exceptions import RequestEntityTooLarge

from portfolio.exceptions import FormTooLargeError
from portfolio.middleware.errors import portfolio_error_response

MAX_FORM_SIZE = 32 * 1024  # 32 KiB
MAX_REQUEST_SIZE = 1 * 1024 * 1024  # 1 MiB for anything else

# Per-path request size limits
PATH_REQUEST_LIMITS = {
    '/contact': MAX_FORM_SIZE,
    '/checkout': MAX_FORM_SIZE,
}

BODY_METHODS = ('POST', 'PUT', 'PATCH')


class SizeLimitMiddleware:
    """Middleware for enforcing request size limits."""

    def __init__(self, app: Optional[Flask] = None):
        self.app = app
        if app:
            self.init_app(app)

    def init_app(self, app: Flask):
        app.config.setdefault('MAX_CONTENT_LENGTH', MAX_REQUEST_SIZE)
        app.before_request(self._check_request_size)
        app.errorhandler(RequestEntityTooLarge)(self._handle_request_too_large)

    def _check_request_size(self):
        if request.method not in BODY_METHODS:
            return None

        max_size = get_max_request_size(request.path)
        content_length = request.content_length

        if content_length is None:
            # No Content-Length (chunked upload): measure what was sent
            content_length = len(request.get_data(cache=True))

        if content_length > max_size:
            raise FormTooLargeError(
                f'request body of {content_length} bytes exceeds {max_size} bytes'
            )

        return None

    def _handle_request_too_large(self, error):
        # Werkzeug's 413 is reported like any other oversized form
        return portfolio_error_response(FormTooLargeError(str(error)))


def get_max_request_size(path: str) -> int:
    """Get maximum request size for a path."""
    return PATH_REQUEST_LIMITS.get(path.rstrip('/') or '/', MAX_REQUEST_SIZE)
