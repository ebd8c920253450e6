# -*- coding: utf-8 -*-
"""
API key issuance.

Generates a key, stores its hash and prefix, and hands the raw key back
exactly once. There is no retry and no de-duplication: each call mints a
new, independently valid key.
"""
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio.exceptions import CredentialIssueError
from portfolio.infra.log import get_logger
from portfolio.models.api_key import ApiKey
from portfolio.services.api_key_utils import APIKeyUtils

logger = get_logger(__name__)


def issue_api_key(session: Session, email: str, tier: str, credits: int) -> str:
    """
    Create and persist a new API key.

    Args:
        session: SQLAlchemy session to write through
        email: owner of the key
        tier: tier label stored with the key
        credits: usage allowance

    Returns:
        The raw API key. It cannot be recovered after this returns.

    Raises:
        CredentialIssueError: if the insert fails. The session is rolled back.
    """
    api_key, key_hash = APIKeyUtils.generate_key_pair()
    key_prefix = APIKeyUtils.display_prefix(api_key)

    record = ApiKey(
        key_hash=key_hash,
        key_prefix=key_prefix,
        user_email=email,
        tier=tier,
        credits=credits,
    )

    try:
        session.add(record)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise CredentialIssueError(f"failed to store api key {key_prefix}***: {e}") from e

    logger.info(
        "api key issued",
        key_prefix=key_prefix,
        tier=tier,
        credits=credits,
    )
    return api_key
