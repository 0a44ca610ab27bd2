from django.conf import settings
from rest_framework import serializers

from .models import Tip, TipType


class TipCreateSerializer(serializers.Serializer):
    """Guest tip request."""

    short_code = serializers.CharField(max_length=32)
    amount = serializers.IntegerField(error_messages={'invalid': 'Amount must be a whole number'})
    guest_pays_fee = serializers.BooleanField(default=False)
    staff_id = serializers.UUIDField(required=False, allow_null=True)
    type = serializers.ChoiceField(choices=TipType.choices, required=False)


class TipCreateResponseSerializer(serializers.Serializer):
    tip_id = serializers.UUIDField()
    order_id = serializers.CharField()
    snap_token = serializers.CharField()
    redirect_url = serializers.URLField()


class TipStatusSerializer(serializers.ModelSerializer):
    """Public view of a tip for the success/pending pages."""

    venue_name = serializers.CharField(source='venue.name', read_only=True)
    staff_name = serializers.CharField(source='staff.display_name', read_only=True, default=None)
    poll = serializers.SerializerMethodField()

    class Meta:
        model = Tip
        fields = [
            'order_id',
            'status',
            'type',
            'amount',
            'platform_fee',
            'total_amount',
            'guest_pays_fee',
            'currency',
            'venue_name',
            'staff_name',
            'paid_at',
            'created_at',
            'poll',
        ]
        read_only_fields = fields

    def get_poll(self, obj):
        return {
            'interval_ms': settings.TIP_STATUS_POLL_INTERVAL_MS,
            'max_polls': settings.TIP_STATUS_MAX_POLLS,
        }


class WebhookAckSerializer(serializers.Serializer):
    status = serializers.CharField()
    processed = serializers.BooleanField()

