"""
Payout reporting and mark-paid.

Reports group allocations per staff member for an inclusive date range.
The platform fee shown is derived at report time, never stored.
"""

import logging
from datetime import date
from uuid import UUID

from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from apps.accounts.context import RequestContext
from apps.payouts.models import Payout, PayoutStatus, TipAllocation
from apps.tips.services import platform_fee_for
from apps.venues.models import Staff
from apps.venues.services import resolve_venue

from .exceptions import PayoutStaffNotFoundError, NothingToPayError

logger = logging.getLogger(__name__)


def _unbatched_allocations(venue, start: date, end: date):
    return TipAllocation.objects.filter(
        staff__venue=venue,
        date__gte=start,
        date__lte=end,
        payout__isnull=True,
    )


def _staff_rows(allocations) -> list:
    rows = (
        allocations
        .values('staff_id', 'staff__display_name', 'staff__role')
        .annotate(
            tips_count=Count('id'),
            gross_amount=Sum('amount'),
            pending_count=Count('id', filter=Q(status=PayoutStatus.PENDING)),
        )
        .order_by('-gross_amount', 'staff__display_name')
    )

    staff_payouts = []
    for row in rows:
        gross = row['gross_amount'] or 0
        fee = platform_fee_for(gross)
        staff_payouts.append({
            'staff_id': row['staff_id'],
            'display_name': row['staff__display_name'],
            'role': row['staff__role'],
            'tips_count': row['tips_count'],
            'gross_amount': gross,
            'platform_fee': fee,
            'net_amount': gross - fee,
            'status': PayoutStatus.PAID if row['pending_count'] == 0 else PayoutStatus.PENDING,
        })
    return staff_payouts


def build_payout_report(venue, start: date, end: date) -> dict:
    payout = Payout.objects.filter(venue=venue, period_start=start, period_end=end).first()

    if payout is not None:
        allocations = payout.allocations.all()
        status = payout.status
    else:
        allocations = _unbatched_allocations(venue, start, end)
        status = PayoutStatus.PENDING

    staff_payouts = _staff_rows(allocations)
    total_gross = sum(row['gross_amount'] for row in staff_payouts)
    total_fee = platform_fee_for(total_gross)

    return {
        'id': payout.id if payout else None,
        'venue_id': venue.id,
        'period_start': start,
        'period_end': end,
        'total_gross': total_gross,
        'total_fee': total_fee,
        'total_net': total_gross - total_fee,
        'status': status,
        'paid_at': payout.paid_at if payout else None,
        'staff_payouts': staff_payouts,
    }


def get_payout_report(
    *,
    actor: RequestContext,
    start: date,
    end: date,
    venue_id: UUID = None
) -> dict:
    """
    Payout report for a venue and inclusive period.

    Uses the existing batch for exactly this period when there is one,
    otherwise the allocations in range not yet attached to any batch.
    """
    venue = resolve_venue(actor=actor, venue_id=venue_id)
    return build_payout_report(venue, start, end)


@transaction.atomic
def mark_paid(
    *,
    actor: RequestContext,
    start: date,
    end: date,
    venue_id: UUID = None,
    staff_id: UUID = None
) -> dict:
    """
    Mark a period's allocations paid, for all staff or one staff member.

    Creates the batch if needed and attaches unbatched allocations in the
    range. The batch becomes PAID once no allocation in it is pending.

    Raises:
        PayoutStaffNotFoundError: staff_id not in venue
        NothingToPayError: No allocations in the period
    """
    venue = resolve_venue(actor=actor, venue_id=venue_id)

    if staff_id and not Staff.objects.filter(id=staff_id, venue=venue).exists():
        raise PayoutStaffNotFoundError()

    payout, _ = Payout.objects.select_for_update().get_or_create(
        venue=venue,
        period_start=start,
        period_end=end,
    )
    _unbatched_allocations(venue, start, end).update(payout=payout)

    if not payout.allocations.exists():
        raise NothingToPayError()

    now = timezone.now()
    to_pay = payout.allocations.filter(status=PayoutStatus.PENDING)
    if staff_id:
        to_pay = to_pay.filter(staff_id=staff_id)
    marked = to_pay.update(status=PayoutStatus.PAID, paid_at=now)

    payout.total_amount = payout.allocations.aggregate(total=Sum('amount'))['total'] or 0
    if not payout.allocations.filter(status=PayoutStatus.PENDING).exists():
        payout.status = PayoutStatus.PAID
        payout.paid_at = now
    payout.save()

    logger.info(
        "Payout %s (%s..%s) for venue %s: %d allocations marked paid by %s",
        payout.id, start, end, venue.id, marked, actor.user_id
    )
    return build_payout_report(venue, start, end)
