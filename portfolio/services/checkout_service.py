# -*- coding: utf-8 -*-
"""
Stripe Checkout flow.

1. create_checkout_session(): tier -> price -> hosted Checkout URL
2. the visitor pays on Stripe and is sent back to /compress/success
3. complete_checkout(): session id -> verified payment -> new API key

Payment is confirmed by retrieving the session synchronously; no
webhooks are involved.
"""
from typing import NamedTuple

import stripe
from sqlalchemy.orm import Session

from portfolio.config import Config
from portfolio.exceptions import (
    CheckoutSessionError,
    MissingSessionError,
    PaymentVerificationError,
)
from portfolio.infra.log import get_logger
from portfolio.services.api_key_service import issue_api_key
from portfolio.services.pricing import allowance_for_amount, resolve_price_id

logger = get_logger(__name__)


class PaymentConfirmation(NamedTuple):
    session_id: str
    amount_total: int
    email: str


class IssuedKey(NamedTuple):
    api_key: str
    tier: str
    credits: int
    email: str


def _stripe_message(e: Exception) -> str:
    return getattr(e, "user_message", None) or str(e)


def create_checkout_session(tier: str, config: Config) -> str:
    """
    Create a Stripe Checkout session for a tier.

    Returns:
        URL of the hosted payment page.

    Raises:
        InvalidTierError: before Stripe is contacted.
        CheckoutSessionError: if Stripe rejects or fails the request.
    """
    price_id = resolve_price_id(tier, config.price_ids)

    try:
        session = stripe.checkout.Session.create(
            api_key=config.stripe_secret_key,
            mode="payment",
            line_items=[{
                "price": price_id,
                "quantity": 1,
            }],
            success_url=config.success_url,
            cancel_url=config.cancel_url,
        )
    except stripe.StripeError as e:
        raise CheckoutSessionError(
            f"stripe session creation failed for tier {tier}: {_stripe_message(e)}"
        ) from e

    logger.info("checkout session created", session_id=session.id, tier=tier)
    return session.url


def _customer_email(session) -> str:
    details = getattr(session, "customer_details", None)
    email = getattr(details, "email", None) if details is not None else None
    return email or getattr(session, "customer_email", None) or ""


def confirm_payment(session_id: str, config: Config) -> PaymentConfirmation:
    """
    Look up a Checkout session on Stripe.

    Raises:
        MissingSessionError: if no session id was supplied.
        PaymentVerificationError: if Stripe cannot return the session.
    """
    if not session_id:
        raise MissingSessionError()

    try:
        session = stripe.checkout.Session.retrieve(session_id, api_key=config.stripe_secret_key)
    except stripe.StripeError as e:
        raise PaymentVerificationError(
            f"failed to retrieve stripe session {session_id}: {_stripe_message(e)}"
        ) from e

    return PaymentConfirmation(
        session_id=session_id,
        amount_total=session.amount_total or 0,
        email=_customer_email(session),
    )


def complete_checkout(db_session: Session, session_id: str, config: Config) -> IssuedKey:
    """
    Verify a returning checkout and mint its API key.

    Calling this twice for the same session id issues two keys.
    The session's payment_status is not checked: an open, unpaid session
    is treated like a paid one and the amount alone picks the allowance.
    """
    payment = confirm_payment(session_id, config)
    allowance = allowance_for_amount(payment.amount_total)

    api_key = issue_api_key(
        db_session,
        email=payment.email,
        tier=allowance.tier,
        credits=allowance.credits,
    )
    return IssuedKey(
        api_key=api_key,
        tier=allowance.tier,
        credits=allowance.credits,
        email=payment.email,
    )
