"""
Reports Serializers
===================

Input serializers validate query parameters; response serializers
document the plain dicts returned by :class:`ReportingQueries`.
"""

from rest_framework import serializers

from apps.tips.models import TipStatus

from .queries import DASHBOARD_PERIODS, DEFAULT_TRANSACTIONS_LIMIT


# ============================================
# Input serializers
# ============================================

class DashboardQuerySerializer(serializers.Serializer):
    period = serializers.ChoiceField(choices=DASHBOARD_PERIODS, default='week')
    venue_id = serializers.UUIDField(required=False)


class TransactionsQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=['all'] + list(TipStatus.values),
        required=False
    )
    gateway_status = serializers.CharField(max_length=30, required=False)
    venue_id = serializers.UUIDField(required=False)
    limit = serializers.IntegerField(
        min_value=1,
        max_value=500,
        default=DEFAULT_TRANSACTIONS_LIMIT
    )


class CommissionQuerySerializer(serializers.Serializer):
    start = serializers.DateField(error_messages={'required': 'start and end dates required'})
    end = serializers.DateField(error_messages={'required': 'start and end dates required'})

    def validate(self, attrs):
        if attrs['start'] > attrs['end']:
            raise serializers.ValidationError('start must not be after end')
        return attrs


# ============================================
# Response serializers
# ============================================

class DashboardStatsSerializer(serializers.Serializer):
    total_tips = serializers.IntegerField()
    transaction_count = serializers.IntegerField()
    average_tip = serializers.IntegerField()
    active_staff = serializers.IntegerField()


class TopStaffSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    display_name = serializers.CharField()
    total_tips = serializers.IntegerField()
    tips_count = serializers.IntegerField()


class VenueRefSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()


class DashboardResponseSerializer(serializers.Serializer):
    venue = VenueRefSerializer()
    period = serializers.CharField()
    stats = DashboardStatsSerializer()
    top_staff = TopStaffSerializer(many=True)
    has_pending_payouts = serializers.BooleanField()


class AdminStatsSerializer(serializers.Serializer):
    total_venues = serializers.IntegerField()
    active_venues = serializers.IntegerField()
    total_transactions = serializers.IntegerField()
    total_volume = serializers.IntegerField()
    today_transactions = serializers.IntegerField()
    failed_today = serializers.IntegerField()


class AdminVenueSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    area = serializers.CharField()
    gateway_status = serializers.CharField()
    status = serializers.CharField()
    total_volume = serializers.IntegerField()
    last_activity = serializers.DateTimeField(allow_null=True)
    staff_count = serializers.IntegerField()


class AdminTransactionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    order_id = serializers.CharField()
    venue = serializers.CharField()
    amount = serializers.IntegerField()
    gateway_status = serializers.CharField()
    status = serializers.CharField()
    payment_method = serializers.CharField()
    staff_name = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    error_message = serializers.CharField(allow_null=True)


class VenueCommissionSerializer(serializers.Serializer):
    venue_id = serializers.UUIDField()
    venue_name = serializers.CharField()
    total_tips = serializers.IntegerField()
    transaction_count = serializers.IntegerField()
    platform_fee = serializers.IntegerField()


class CommissionReportSerializer(serializers.Serializer):
    period = serializers.CharField()
    total_tips = serializers.IntegerField()
    total_platform_fee = serializers.IntegerField()
    total_transactions = serializers.IntegerField()
    venues = VenueCommissionSerializer(many=True)
