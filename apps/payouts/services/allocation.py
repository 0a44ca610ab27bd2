"""
Tip allocation service.

Credits a paid tip's net amount to staff: the targeted staff member for
personal tips, or every active pool participant for pool tips.
"""

import logging

from django.db import transaction
from django.utils import timezone

from apps.payouts.models import TipAllocation
from apps.tips.models import TipType
from apps.venues.models import Staff, StaffStatus

logger = logging.getLogger(__name__)


def split_amount(total: int, participants: list) -> list:
    """
    Split an integer minor-unit amount exactly.

    Algorithm:
        1. Base share: ``base = total // N``
        2. Remainder: ``remainder = total % N``
        3. First 'remainder' participants get ``base + 1``
        4. Rest get ``base``

    Args:
        total: Amount in minor units
        participants: Ordered list; order decides who gets the remainder

    Returns:
        list[tuple]: (participant, amount) pairs summing to ``total``

    Raises:
        ValueError: If participants list is empty

    Example:
        >>> split_amount(100, ['a', 'b', 'c'])
        [('a', 34), ('b', 33), ('c', 33)]
    """
    if not participants:
        raise ValueError("At least one participant required")

    count = len(participants)
    base = total // count
    remainder = total % count

    return [
        (participant, base + 1 if i < remainder else base)
        for i, participant in enumerate(participants)
    ]


def pool_participants(venue):
    return list(
        Staff.objects
        .filter(venue=venue, status=StaffStatus.ACTIVE, participates_in_pool=True)
        .order_by('created_at', 'id')
    )


@transaction.atomic
def allocate_tip(*, tip) -> list:
    """
    Create TipAllocations for a PAID tip.

    Safe to call more than once; existing allocations are returned as is.

    Returns:
        list[TipAllocation]
    """
    existing = list(tip.allocations.all())
    if existing:
        return existing

    if tip.type == TipType.PERSONAL and tip.staff_id:
        shares = [(tip.staff, tip.net_amount)]
    else:
        participants = pool_participants(tip.venue)
        if not participants:
            logger.warning("Pool tip %s has no participating staff", tip.order_id)
            return []
        shares = split_amount(tip.net_amount, participants)

    allocation_date = timezone.localdate(tip.paid_at or timezone.now())
    allocations = TipAllocation.objects.bulk_create([
        TipAllocation(tip=tip, staff=staff, amount=amount, date=allocation_date)
        for staff, amount in shares
        if amount > 0
    ])

    logger.info("Tip %s allocated to %d staff", tip.order_id, len(allocations))
    return allocations
