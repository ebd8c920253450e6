"""gunicorn settings for the portfolio site."""
import os
import sys

bind = f"0.0.0.0:{os.environ.get('PORT', '8080')}"
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))
threads = int(os.environ.get("GUNICORN_THREADS", "8"))

# Requests running longer than this are aborted
timeout = 30
# Grace period for in-flight requests on SIGTERM
graceful_timeout = 15
keepalive = 60

# Slowloris protection
limit_request_line = 4094
limit_request_fields = 100

accesslog = None  # requests are logged by the app as JSON
errorlog = "-"


def worker_exit(server, worker):
    """Close the worker's database pool once it stops serving."""
    # A worker that failed to boot has no app; importing it here would boot it again
    module = sys.modules.get("portfolio.main")
    app = getattr(module, "app", None)
    if app is None:
        return

    from portfolio.factory import shutdown

    shutdown(app)
