"""
Platform fee arithmetic.

All amounts are integer minor units. The fee is always rounded up.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_CEILING

from django.conf import settings


# Upper bound of the PositiveIntegerField amount columns.
AMOUNT_COLUMN_MAX = 2147483647


@dataclass(frozen=True)
class FeeSplit:
    amount: int
    platform_fee: int
    net_amount: int
    total_amount: int


def platform_fee_for(amount: int, fee_percent=None) -> int:
    """``ceil(amount * fee_percent / 100)`` without float rounding error."""
    if fee_percent is None:
        fee_percent = settings.PLATFORM_FEE_PERCENT
    fee = Decimal(amount) * Decimal(str(fee_percent)) / Decimal(100)
    return int(fee.to_integral_value(rounding=ROUND_CEILING))


def compute_fee_split(amount: int, guest_pays_fee: bool, fee_percent=None) -> FeeSplit:
    """
    Split a tip amount into platform fee and net amount.

    Example:
        >>> compute_fee_split(50000, guest_pays_fee=False, fee_percent=5)
        FeeSplit(amount=50000, platform_fee=2500, net_amount=47500, total_amount=50000)
    """
    platform_fee = platform_fee_for(amount, fee_percent)
    return FeeSplit(
        amount=amount,
        platform_fee=platform_fee,
        net_amount=amount - platform_fee,
        total_amount=amount + platform_fee if guest_pays_fee else amount,
    )


def max_tip_amount(fee_percent=None) -> int:
    """Largest amount whose total, fee included, still fits the amount columns."""
    if fee_percent is None:
        fee_percent = settings.PLATFORM_FEE_PERCENT
    limit = Decimal(AMOUNT_COLUMN_MAX - 1) * 100 / (100 + Decimal(str(fee_percent)))
    return int(limit)
