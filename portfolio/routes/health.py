# -*- coding: utf-8 -*-

import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from portfolio.config import get_config

health_bp = Blueprint('health', __name__)

STARTED_AT_EXTENSION = 'portfolio.started_at'


def format_uptime(seconds: float) -> str:
    """Render a duration like 1h2m3s."""
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{seconds:.3f}s"


@health_bp.route('/health', methods=['GET', 'HEAD'])
def health():
    """Liveness check. No dependency checks, always 200 while the process serves."""
    started_at = current_app.extensions[STARTED_AT_EXTENSION]
    response = jsonify({
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ'),
        'version': get_config().version,
        'uptime': format_uptime(time.monotonic() - started_at),
    })
    response.headers['Cache-Control'] = 'no-cache'
    return response, 200
