# -*- coding: utf-8 -*-
"""
Pricing tiers.

Two fixed tables: the tier a visitor picks on the pricing page (mapped to
a configured Stripe price id) and the amount Stripe reports as paid
(mapped back to a tier label and credit allowance).
"""
from typing import Dict, Mapping, NamedTuple

from portfolio.exceptions import InvalidTierError
from portfolio.infra.log import get_logger

logger = get_logger(__name__)

TIERS = ("starter", "growth", "professional")


class TierAllowance(NamedTuple):
    tier: str
    credits: int


UNKNOWN_ALLOWANCE = TierAllowance("unknown", 0)

# Amount paid in cents -> allowance
AMOUNT_ALLOWANCES: Dict[int, TierAllowance] = {
    1000: TierAllowance("Starter", 1500),          # $10
    3900: TierAllowance("Growth", 10000),          # $39
    9900: TierAllowance("Professional", 50000),    # $99
}


def resolve_price_id(tier: str, price_ids: Mapping[str, str]) -> str:
    """
    Get the Stripe price id for a tier.

    Raises:
        InvalidTierError: for any tier outside TIERS.
    """
    if tier not in TIERS:
        raise InvalidTierError(tier)
    return price_ids.get(tier, "")


def allowance_for_amount(amount_cents: int) -> TierAllowance:
    """
    Map an amount paid to its tier and credits.

    Amounts not in the table fall back to UNKNOWN_ALLOWANCE rather than
    failing; a price change at Stripe shows up here as zero-credit keys.
    """
    allowance = AMOUNT_ALLOWANCES.get(amount_cents)
    if allowance is None:
        logger.warning("unrecognised payment amount", amount_cents=amount_cents)
        return UNKNOWN_ALLOWANCE
    return allowance
