from rest_framework import serializers

from .models import PayoutStatus


class PeriodQuerySerializer(serializers.Serializer):
    """Inclusive ``start``/``end`` date range with optional venue."""

    start = serializers.DateField(error_messages={'required': 'start and end dates required'})
    end = serializers.DateField(error_messages={'required': 'start and end dates required'})
    venue_id = serializers.UUIDField(required=False)

    def validate(self, attrs):
        if attrs['start'] > attrs['end']:
            raise serializers.ValidationError('start must not be after end')
        return attrs


class MarkPaidInputSerializer(PeriodQuerySerializer):
    """Mark a period paid for every staff member, or just ``staff_id``."""

    staff_id = serializers.UUIDField(required=False, allow_null=True)


class StaffPayoutSerializer(serializers.Serializer):
    staff_id = serializers.UUIDField()
    display_name = serializers.CharField()
    role = serializers.CharField()
    tips_count = serializers.IntegerField()
    gross_amount = serializers.IntegerField()
    platform_fee = serializers.IntegerField()
    net_amount = serializers.IntegerField()
    status = serializers.ChoiceField(choices=PayoutStatus.choices)


class PayoutReportSerializer(serializers.Serializer):
    id = serializers.UUIDField(allow_null=True)
    venue_id = serializers.UUIDField()
    period_start = serializers.DateField()
    period_end = serializers.DateField()
    total_gross = serializers.IntegerField()
    total_fee = serializers.IntegerField()
    total_net = serializers.IntegerField()
    status = serializers.ChoiceField(choices=PayoutStatus.choices)
    paid_at = serializers.DateTimeField(allow_null=True)
    staff_payouts = StaffPayoutSerializer(many=True)
