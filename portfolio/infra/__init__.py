"""
Infrastructure package - unified entry points for core services.

- Database (db)
- Logging (configure_logging, init_logging, get_logger)
"""

from portfolio.infra.db import db
from portfolio.infra.log import configure_logging, init_logging, get_logger

__all__ = [
    "db",
    "configure_logging",
    "init_logging",
    "get_logger",
]
