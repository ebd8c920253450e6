# -*- coding: utf-8 -*-
"""
Rate limiting.

One per-client-IP limit for every route, kept in process memory. Health
checks and static assets are exempt.
"""
from flask import Flask, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

EXEMPT_PREFIXES = ('/health', '/static/')


def _is_exempt() -> bool:
    return request.path.startswith(EXEMPT_PREFIXES)


def init_rate_limiter(app: Flask, default_limit: str) -> Limiter:
    """Attach Flask-Limiter to the app. RATELIMIT_ENABLED=False turns it off."""
    limiter = Limiter(
        key_func=get_remote_address,
        app=app,
        default_limits=[default_limit],
        storage_uri="memory://",
        strategy="fixed-window",
        default_limits_exempt_when=_is_exempt,
    )
    return limiter
