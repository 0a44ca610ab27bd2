"""
Reporting Module
================

Read-only aggregation over tips and allocations for the venue dashboard
and the admin console.

Classes:
    ReportingQueries: Static methods returning plain dicts/lists.

Example:
    Venue dashboard for the last 7 days::

        from apps.reports.queries import ReportingQueries

        data = ReportingQueries.venue_dashboard(venue, period='week')
        print(data['stats']['total_tips'])

Note:
    Platform fees in reports are derived from summed amounts at query
    time (``ceil(total * fee%)``); nothing here writes to the database.
"""

from datetime import timedelta

from django.db.models import (
    Count,
    IntegerField,
    Max,
    OuterRef,
    Q,
    Subquery,
    Sum,
    Value,
    CharField,
)
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.payouts.models import PayoutStatus, TipAllocation
from apps.tips.models import Tip, TipStatus, WebhookLog
from apps.tips.services import platform_fee_for
from apps.venues.models import Staff, StaffStatus, Venue, VenueStatus

DASHBOARD_PERIODS = ('today', 'week', 'month')
TOP_STAFF_LIMIT = 5
DEFAULT_TRANSACTIONS_LIMIT = 100


def _start_of_today(now):
    return timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)


def period_start(period, now=None):
    """Lower bound of a dashboard period: today, last 7 or last 30 days."""
    now = now or timezone.now()
    if period == 'today':
        return _start_of_today(now)
    if period == 'month':
        return now - timedelta(days=30)
    return now - timedelta(days=7)


class ReportingQueries:
    """
    Aggregation queries for dashboards and admin reports.

    Methods:
        venue_dashboard: Tip totals and top staff for one venue.
        admin_stats: Platform-wide counters.
        admin_venues: Venue overview with gateway status and volume.
        admin_transactions: Recent tips with their latest gateway status.
        commission_report: Paid net tips and platform fee per venue.
    """

    @staticmethod
    def venue_dashboard(venue, period='week', now=None):
        """
        Dashboard numbers for a venue.

        Args:
            venue (Venue): The venue.
            period (str): ``'today'``, ``'week'`` or ``'month'``.
            now (datetime, optional): Reference time, defaults to now.

        Returns:
            dict: ``venue``, ``period``, ``stats`` (total_tips,
            transaction_count, average_tip, active_staff), ``top_staff``
            and ``has_pending_payouts``.
        """
        since = period_start(period, now)

        paid_tips = Tip.objects.filter(
            venue=venue,
            status=TipStatus.PAID,
            paid_at__gte=since,
        )
        totals = paid_tips.aggregate(
            total=Coalesce(Sum('net_amount'), 0, output_field=IntegerField()),
            count=Count('id'),
        )
        count = totals['count']
        total = totals['total']

        top_staff = (
            TipAllocation.objects
            .filter(staff__venue=venue, tip__paid_at__gte=since)
            .values('staff_id', 'staff__display_name')
            .annotate(total_tips=Sum('amount'), tips_count=Count('id'))
            .order_by('-total_tips', 'staff__display_name')[:TOP_STAFF_LIMIT]
        )

        return {
            'venue': {'id': venue.id, 'name': venue.name},
            'period': period,
            'stats': {
                'total_tips': total,
                'transaction_count': count,
                'average_tip': total // count if count else 0,
                'active_staff': Staff.objects.filter(venue=venue, status=StaffStatus.ACTIVE).count(),
            },
            'top_staff': [
                {
                    'id': row['staff_id'],
                    'display_name': row['staff__display_name'],
                    'total_tips': row['total_tips'],
                    'tips_count': row['tips_count'],
                }
                for row in top_staff
            ],
            'has_pending_payouts': TipAllocation.objects.filter(
                staff__venue=venue,
                status=PayoutStatus.PENDING,
            ).exists(),
        }

    @staticmethod
    def admin_stats(now=None):
        """Platform counters; volume counts PAID tips only."""
        today = _start_of_today(now or timezone.now())

        tip_counts = Tip.objects.aggregate(
            total_transactions=Count('id'),
            total_volume=Coalesce(
                Sum('amount', filter=Q(status=TipStatus.PAID)), 0, output_field=IntegerField()
            ),
            today_transactions=Count('id', filter=Q(created_at__gte=today)),
            failed_today=Count('id', filter=Q(created_at__gte=today, status=TipStatus.FAILED)),
        )
        venue_counts = Venue.objects.aggregate(
            total_venues=Count('id'),
            active_venues=Count('id', filter=Q(status=VenueStatus.ACTIVE)),
        )
        return {**venue_counts, **tip_counts}

    @staticmethod
    def admin_venues():
        """
        All venues, newest first, with gateway status and paid volume.

        Returns:
            list[dict]: id, name, area, gateway_status, status,
            total_volume, last_activity, staff_count.
        """
        paid_volume = (
            Tip.objects
            .filter(venue=OuterRef('pk'), status=TipStatus.PAID)
            .values('venue')
            .annotate(total=Sum('amount'))
            .values('total')
        )
        venues = (
            Venue.objects
            .annotate(
                staff_count=Count('staff', distinct=True),
                last_activity=Max('tips__created_at'),
                total_volume=Coalesce(Subquery(paid_volume, output_field=IntegerField()), 0),
            )
            .order_by('-created_at')
        )

        return [
            {
                'id': venue.id,
                'name': venue.name,
                'area': venue.address or 'Unknown',
                'gateway_status': venue.gateway_status,
                'status': venue.status,
                'total_volume': venue.total_volume,
                'last_activity': venue.last_activity,
                'staff_count': venue.staff_count,
            }
            for venue in venues
        ]

    @staticmethod
    def admin_transactions(status=None, gateway_status=None, venue_id=None, limit=DEFAULT_TRANSACTIONS_LIMIT):
        """
        Recent tips, newest first.

        The gateway status is re-derived from the latest webhook log for
        the order (``'pending'`` when none arrived yet).

        Args:
            status (str, optional): Tip status filter (``'all'`` ignored).
            gateway_status (str, optional): Midtrans status filter.
            venue_id (UUID, optional): Restrict to one venue.
            limit (int): Maximum rows.
        """
        latest_log_status = (
            WebhookLog.objects
            .filter(order_id=OuterRef('order_id'))
            .order_by('-created_at')
            .values('transaction_status')[:1]
        )
        tips = (
            Tip.objects
            .select_related('venue', 'staff')
            .annotate(
                latest_gateway_status=Coalesce(
                    Subquery(latest_log_status, output_field=CharField()),
                    Value('pending'),
                )
            )
            .order_by('-created_at')
        )

        if status and status != 'all':
            tips = tips.filter(status=status)
        if venue_id:
            tips = tips.filter(venue_id=venue_id)
        if gateway_status and gateway_status != 'all':
            tips = tips.filter(latest_gateway_status=gateway_status)

        return [
            {
                'id': tip.id,
                'order_id': tip.order_id,
                'venue': tip.venue.name,
                'amount': tip.amount,
                'gateway_status': tip.latest_gateway_status,
                'status': tip.status,
                'payment_method': tip.payment_type or 'Unknown',
                'staff_name': tip.staff.display_name if tip.staff else None,
                'created_at': tip.created_at,
                'error_message': 'Payment failed' if tip.status == TipStatus.FAILED else None,
            }
            for tip in tips[:limit]
        ]

    @staticmethod
    def commission_report(start_date, end_date):
        """
        Paid net tips and platform fee per venue for an inclusive range.

        Example:
            Two paid tips with net 47,500 and 95,000::

                >>> report = ReportingQueries.commission_report(start, end)
                >>> report['total_tips'], report['total_platform_fee']
                (142500, 7125)
        """
        rows = (
            Tip.objects
            .filter(
                status=TipStatus.PAID,
                created_at__date__gte=start_date,
                created_at__date__lte=end_date,
            )
            .values('venue_id', 'venue__name')
            .annotate(total_tips=Sum('net_amount'), transaction_count=Count('id'))
            .order_by('-total_tips', 'venue__name')
        )

        venues = [
            {
                'venue_id': row['venue_id'],
                'venue_name': row['venue__name'],
                'total_tips': row['total_tips'],
                'transaction_count': row['transaction_count'],
                'platform_fee': platform_fee_for(row['total_tips']),
            }
            for row in rows
        ]

        return {
            'period': f"{start_date.isoformat()}_{end_date.isoformat()}",
            'total_tips': sum(v['total_tips'] for v in venues),
            'total_platform_fee': sum(v['platform_fee'] for v in venues),
            'total_transactions': sum(v['transaction_count'] for v in venues),
            'venues': venues,
        }
