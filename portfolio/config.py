# -*- coding: utf-8 -*-
"""
Application configuration.

Everything is read from the environment once, when the app is created.
"""
import os
from dataclasses import dataclass, field
from typing import Dict

from portfolio import __version__
from portfolio.exceptions import ConfigError


def normalize_db_url(url: str) -> str:
    """Point plain PostgreSQL URLs at the psycopg v3 driver."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://") and "+psycopg://" not in url:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Config:
    database_url: str
    stripe_secret_key: str = ""
    price_ids: Dict[str, str] = field(default_factory=dict)
    site_base_url: str = "https://devrewoh.com"
    port: int = 8080
    version: str = __version__
    log_level: str = "INFO"
    log_json: bool = True
    rate_limit_default: str = "100 per minute"
    migrate_on_start: bool = True
    testing: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Build the config from environment variables.

        Raises:
            ConfigError: if DATABASE_URL is not set or PORT is not a number.
        """
        db_url = os.environ.get("DATABASE_URL", "").strip()
        if not db_url:
            raise ConfigError("DATABASE_URL not set")

        port_raw = os.environ.get("PORT", "8080").strip() or "8080"
        try:
            port = int(port_raw)
        except ValueError:
            raise ConfigError(f"PORT must be an integer, got {port_raw!r}")

        return cls(
            database_url=normalize_db_url(db_url),
            stripe_secret_key=os.environ.get("STRIPE_SECRET_KEY", "").strip(),
            price_ids={
                "starter": os.environ.get("STRIPE_PRICE_STARTER", "").strip(),
                "growth": os.environ.get("STRIPE_PRICE_GROWTH", "").strip(),
                "professional": os.environ.get("STRIPE_PRICE_PRO", "").strip(),
            },
            site_base_url=os.environ.get("SITE_BASE_URL", "https://devrewoh.com").rstrip("/"),
            port=port,
            version=os.environ.get("APP_VERSION", __version__),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            log_json=_env_flag("PORTFOLIO_LOG_JSON", "true"),
            rate_limit_default=os.environ.get("RATELIMIT_DEFAULT", "100 per minute"),
            migrate_on_start=_env_flag("PORTFOLIO_DB_MIGRATE_ON_START", "true"),
            testing=_env_flag("TESTING", "false"),
        )

    @property
    def success_url(self) -> str:
        return f"{self.site_base_url}/compress/success?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.site_base_url}/compress"


CONFIG_EXTENSION = "portfolio.config"


def get_config() -> Config:
    """Config of the running app."""
    from flask import current_app

    return current_app.extensions[CONFIG_EXTENSION]
