# -*- coding: utf-8 -*-
import time
from pathlib import Path

from flask import Flask
from flask_compress import Compress
from sqlalchemy import text
from werkzeug.middleware.proxy_fix import ProxyFix

from portfolio.config import CONFIG_EXTENSION, Config
from portfolio.infra.db import db
from portfolio.infra.log import get_logger, init_logging
from portfolio.middleware.errors import register_error_handlers
from portfolio.routes.health import STARTED_AT_EXTENSION
from portfolio.services.rate_limiter import init_rate_limiter
from portfolio.services.request_context import init_request_context
from portfolio.services.security_headers import apply_security_headers_to_app
from portfolio.services.size_limit_middleware import SizeLimitMiddleware

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent

COMPRESS_LEVEL = 5


def _migrate_db(app: Flask) -> None:
    """Run Alembic migrations to head using the app's DB URL."""
    from alembic import command
    from alembic.config import Config as AlembicConfig

    cfg = AlembicConfig()  # in-memory config, no alembic.ini needed
    cfg.set_main_option("script_location", str(BASE_DIR / "migrations"))
    cfg.set_main_option("sqlalchemy.url", app.config["SQLALCHEMY_DATABASE_URI"])
    command.upgrade(cfg, "head")
    logger.info("Database migrations applied")


def _init_db(app: Flask, config: Config) -> None:
    """Create or migrate the schema, then prove the database answers."""
    with app.app_context():
        if config.testing:
            db.create_all()
        elif config.migrate_on_start:
            _migrate_db(app)

        with db.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

        driver = app.config["SQLALCHEMY_DATABASE_URI"].split("://", 1)[0]
        logger.info("Database ready", driver=driver)


def create_app(config: Config = None) -> Flask:
    """
    Build the application.

    Raises:
        ConfigError: when required configuration is missing.
        sqlalchemy.exc.SQLAlchemyError: when the database is unreachable.
    """
    config = config or Config.from_env()

    # /static is served by routes.static so it can set cache headers
    app = Flask(__name__, static_folder=None)
    app.url_map.strict_slashes = False

    app.extensions[CONFIG_EXTENSION] = config
    app.extensions[STARTED_AT_EXTENSION] = time.monotonic()

    app.config["TESTING"] = config.testing
    app.config["SQLALCHEMY_DATABASE_URI"] = config.database_url
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    if not config.database_url.startswith("sqlite"):
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            "pool_pre_ping": True,
            "pool_recycle": 300,
            "pool_timeout": 10,
        }
    app.config["RATELIMIT_ENABLED"] = not config.testing

    # Real client IP from the first proxy hop
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1)

    # --- Observability ---
    init_logging(app, json_enabled=config.log_json, log_level=config.log_level)
    init_request_context(app)

    # --- Response compression ---
    app.config["COMPRESS_LEVEL"] = COMPRESS_LEVEL
    app.config["COMPRESS_DEFLATE_LEVEL"] = COMPRESS_LEVEL
    app.config["COMPRESS_ALGORITHM"] = ["gzip", "deflate"]
    Compress(app)

    # --- Request guards ---
    init_rate_limiter(app, config.rate_limit_default)
    SizeLimitMiddleware(app)
    apply_security_headers_to_app(app)
    register_error_handlers(app)

    # --- Routes ---
    from portfolio.routes.checkout import checkout_bp
    from portfolio.routes.contact import contact_bp
    from portfolio.routes.health import health_bp
    from portfolio.routes.pages import pages_bp
    from portfolio.routes.static import static_bp

    app.register_blueprint(pages_bp)
    app.register_blueprint(contact_bp)
    app.register_blueprint(checkout_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(static_bp)

    # --- Database ---
    db.init_app(app)
    import portfolio.models  # noqa: F401  (register tables)
    _init_db(app, config)

    logger.info(
        "Application created",
        version=config.version,
        testing=config.testing,
    )
    return app


def shutdown(app: Flask) -> None:
    """Release the database connection pool."""
    with app.app_context():
        db.engine.dispose()
    logger.info("Database pool closed")
