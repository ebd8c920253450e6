"""Startup tests: the app refuses to boot without its datastore."""
import os
import runpy
import sys
import tempfile
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from portfolio.config import Config, normalize_db_url
from portfolio.exceptions import ConfigError
from portfolio.factory import create_app, shutdown


def test_missing_database_url_is_fatal(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ConfigError):
        create_app()


def test_blank_database_url_is_fatal(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "   ")
    with pytest.raises(ConfigError):
        Config.from_env()


def test_invalid_port_is_fatal(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(ConfigError):
        Config.from_env()


def test_unreachable_database_is_fatal(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:////nonexistent-dir/portfolio/app.db")
    with pytest.raises(SQLAlchemyError):
        create_app()


def test_app_boots_with_sqlite(monkeypatch):
    db_fd, db_path = tempfile.mkstemp(suffix=".db")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")
    try:
        app = create_app()
        assert app is not None
        assert app.name == "portfolio.factory"
        shutdown(app)
    finally:
        os.close(db_fd)
        os.unlink(db_path)


def test_config_defaults(monkeypatch):
    for name in ("PORT", "SITE_BASE_URL", "APP_VERSION", "STRIPE_PRICE_PRO", "RATELIMIT_DEFAULT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DATABASE_URL", "sqlite://")

    config = Config.from_env()
    assert config.port == 8080
    assert config.version == "1.0.0"
    assert config.price_ids["professional"] == ""
    assert config.rate_limit_default == "100 per minute"
    assert config.success_url == "https://devrewoh.com/compress/success?session_id={CHECKOUT_SESSION_ID}"
    assert config.cancel_url == "https://devrewoh.com/compress"


def test_config_reads_prices_and_port(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("STRIPE_PRICE_STARTER", "price_a")
    monkeypatch.setenv("STRIPE_PRICE_GROWTH", "price_b")
    monkeypatch.setenv("STRIPE_PRICE_PRO", "price_c")
    monkeypatch.setenv("SITE_BASE_URL", "https://example.org/")

    config = Config.from_env()
    assert config.port == 9000
    assert config.price_ids == {"starter": "price_a", "growth": "price_b", "professional": "price_c"}
    assert config.cancel_url == "https://example.org/compress"


@pytest.mark.parametrize("url,expected", [
    ("postgres://u:p@db/site", "postgresql+psycopg://u:p@db/site"),
    ("postgresql://u:p@db/site", "postgresql+psycopg://u:p@db/site"),
    ("postgresql+psycopg://u:p@db/site", "postgresql+psycopg://u:p@db/site"),
    ("sqlite:///app.db", "sqlite:///app.db"),
])
def test_normalize_db_url(url, expected):
    assert normalize_db_url(url) == expected


GUNICORN_CONF = Path(__file__).resolve().parent.parent / "gunicorn.conf.py"


def test_worker_exit_skips_worker_without_app(monkeypatch):
    monkeypatch.delitem(sys.modules, "portfolio.main", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    hooks = runpy.run_path(str(GUNICORN_CONF))

    with patch("portfolio.factory.shutdown") as mock_shutdown:
        hooks["worker_exit"](None, None)

    mock_shutdown.assert_not_called()
    assert "portfolio.main" not in sys.modules


def test_worker_exit_closes_pool_of_booted_app(monkeypatch):
    app = object()
    monkeypatch.setitem(sys.modules, "portfolio.main", SimpleNamespace(app=app))
    hooks = runpy.run_path(str(GUNICORN_CONF))

    with patch("portfolio.factory.shutdown") as mock_shutdown:
        hooks["worker_exit"](None, None)

    mock_shutdown.assert_called_once_with(app)
