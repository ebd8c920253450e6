# portfolio/models/api_key.py
"""
Issued API key for the compress service.

Rows are written once, when a checkout completes, and never updated here.
The raw key is not stored: only its SHA-256 hash and a short display
prefix. Column names match the table the compress API reads.
"""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from portfolio.infra.db import db


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApiKey(db.Model):
    __tablename__ = "api_keys"

    id = Column(Integer, primary_key=True)
    key_hash = Column(String(64), unique=True, nullable=False, index=True)
    key_prefix = Column(String(16), nullable=False)
    user_email = Column(String(255), nullable=False, default="")

    # Tier label ("Starter", "Growth", ...) lives in the "name" column
    tier = Column("name", String(64), nullable=False)
    # Credit allowance lives in "monthly_limit"
    credits = Column("monthly_limit", Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ApiKey {self.key_prefix}*** ({self.tier})>"
