"""
Database extension.

The SQLAlchemy engine (and its connection pool) is created per app by
db.init_app() in the factory and disposed on shutdown. Request handlers
receive db.session and hand it to the services explicitly.
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

__all__ = ["db"]
