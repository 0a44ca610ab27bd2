from rest_framework import serializers

from .models import (
    Venue,
    VenueStatus,
    VenueType,
    DistributionMode,
    GatewayEnvironment,
    Staff,
    StaffRole,
    StaffStatus,
    QrCode,
    QrStatus,
    QrType,
)
from .services import build_tip_url


# ============================================
# Venues
# ============================================

class VenueSerializer(serializers.ModelSerializer):
    """Venue output. Midtrans server/client keys are never exposed."""

    gateway_status = serializers.CharField(read_only=True)

    class Meta:
        model = Venue
        fields = [
            'id',
            'name',
            'type',
            'address',
            'phone',
            'email',
            'logo_url',
            'timezone',
            'status',
            'distribution_mode',
            'allow_staff_choice',
            'midtrans_connected',
            'midtrans_merchant_id',
            'midtrans_environment',
            'gateway_status',
            'manager',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class StaffSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Staff
        fields = ['id', 'display_name', 'role', 'avatar_url', 'status']
        read_only_fields = fields


class VenueDetailSerializer(VenueSerializer):
    """Venue with its active staff and tip/QR counts."""

    staff = serializers.SerializerMethodField()
    tips_count = serializers.SerializerMethodField()
    qr_codes_count = serializers.SerializerMethodField()

    class Meta(VenueSerializer.Meta):
        fields = VenueSerializer.Meta.fields + ['staff', 'tips_count', 'qr_codes_count']
        read_only_fields = fields

    def get_staff(self, obj):
        active_staff = obj.staff.filter(status=StaffStatus.ACTIVE).order_by('display_name')
        return StaffSummarySerializer(active_staff, many=True).data

    def get_tips_count(self, obj):
        # List querysets annotate the count; single lookups don't
        if hasattr(obj, 'tips_count'):
            return obj.tips_count
        return obj.tips.count()

    def get_qr_codes_count(self, obj):
        return getattr(obj, 'qr_codes_count', 0)


class VenueUpdateSerializer(serializers.Serializer):
    """Partial update of venue profile fields."""

    name = serializers.CharField(min_length=2, max_length=200, required=False)
    type = serializers.ChoiceField(choices=VenueType.choices, required=False)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    logo_url = serializers.URLField(required=False, allow_blank=True)
    timezone = serializers.CharField(max_length=64, required=False)
    distribution_mode = serializers.ChoiceField(choices=DistributionMode.choices, required=False)
    allow_staff_choice = serializers.BooleanField(required=False)


class VenueSettingsSerializer(serializers.Serializer):
    distribution_mode = serializers.ChoiceField(choices=DistributionMode.choices)
    allow_staff_choice = serializers.BooleanField()
    midtrans_connected = serializers.BooleanField(read_only=True)
    midtrans_merchant_id = serializers.CharField(read_only=True, allow_null=True)
    midtrans_environment = serializers.CharField(read_only=True)


class VenueSettingsUpdateSerializer(serializers.Serializer):
    distribution_mode = serializers.ChoiceField(choices=DistributionMode.choices, required=False)
    allow_staff_choice = serializers.BooleanField(required=False)


class MidtransConnectSerializer(serializers.Serializer):
    """Midtrans merchant credentials. Keys are write-only."""

    merchant_id = serializers.CharField(max_length=100)
    server_key = serializers.CharField(max_length=200, write_only=True)
    client_key = serializers.CharField(max_length=200, write_only=True)
    environment = serializers.ChoiceField(
        choices=GatewayEnvironment.choices,
        default=GatewayEnvironment.SANDBOX
    )


class VenueStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[VenueStatus.ACTIVE, VenueStatus.BLOCKED],
        error_messages={'invalid_choice': 'Invalid status. Must be ACTIVE or BLOCKED.'}
    )


class VenueQuerySerializer(serializers.Serializer):
    """``?venue_id=`` filter; defaults to the caller's own venue."""

    venue_id = serializers.UUIDField(required=False)


# ============================================
# Staff
# ============================================

class QrCodeSummarySerializer(serializers.ModelSerializer):
    tip_url = serializers.SerializerMethodField()

    class Meta:
        model = QrCode
        fields = ['id', 'short_code', 'type', 'status', 'tip_url']
        read_only_fields = fields

    def get_tip_url(self, obj):
        return build_tip_url(obj.short_code)


class StaffSerializer(serializers.ModelSerializer):
    """Staff output with personal QR and tip count."""

    qr_code = serializers.SerializerMethodField()
    tips_count = serializers.SerializerMethodField()
    phone = serializers.SerializerMethodField()
    email = serializers.SerializerMethodField()

    class Meta:
        model = Staff
        fields = [
            'id',
            'venue',
            'display_name',
            'full_name',
            'role',
            'avatar_url',
            'participates_in_pool',
            'status',
            'phone',
            'email',
            'qr_code',
            'tips_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_qr_code(self, obj):
        try:
            qr_code = obj.qr_code
        except QrCode.DoesNotExist:
            return None
        return QrCodeSummarySerializer(qr_code).data

    def get_tips_count(self, obj):
        # List querysets annotate the count; single lookups don't
        if hasattr(obj, 'tips_count'):
            return obj.tips_count
        return obj.tips.count()

    def get_phone(self, obj):
        return obj.user.phone if obj.user else None

    def get_email(self, obj):
        return obj.user.email if obj.user else None


class StaffCreateSerializer(serializers.Serializer):
    venue_id = serializers.UUIDField(required=False)
    display_name = serializers.CharField(
        max_length=100,
        error_messages={'blank': 'Display name is required'}
    )
    full_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=StaffRole.choices)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    participates_in_pool = serializers.BooleanField(default=True)
    avatar_url = serializers.URLField(required=False, allow_blank=True)


class StaffUpdateSerializer(serializers.Serializer):
    display_name = serializers.CharField(max_length=100, required=False)
    full_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=StaffRole.choices, required=False)
    avatar_url = serializers.URLField(required=False, allow_blank=True)
    participates_in_pool = serializers.BooleanField(required=False)
    status = serializers.ChoiceField(choices=StaffStatus.choices, required=False)


# ============================================
# QR codes
# ============================================

class QrCodeSerializer(serializers.ModelSerializer):
    staff = StaffSummarySerializer(read_only=True)
    tip_url = serializers.SerializerMethodField()
    tips_count = serializers.SerializerMethodField()

    class Meta:
        model = QrCode
        fields = [
            'id',
            'venue',
            'staff',
            'short_code',
            'type',
            'label',
            'status',
            'tip_url',
            'tips_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_tip_url(self, obj):
        return build_tip_url(obj.short_code)

    def get_tips_count(self, obj):
        # List querysets annotate the count; single lookups don't
        if hasattr(obj, 'tips_count'):
            return obj.tips_count
        return obj.tips.count()


class QrCodeCreateSerializer(serializers.Serializer):
    venue_id = serializers.UUIDField(required=False)
    type = serializers.ChoiceField(
        choices=[QrType.TABLE, QrType.VENUE],
        error_messages={'invalid_choice': 'Type must be TABLE or VENUE'}
    )
    label = serializers.CharField(
        max_length=100,
        error_messages={
            'blank': 'Label is required',
            'required': 'Label is required',
        }
    )


class QrCodeStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=QrStatus.choices)


class QrDownloadQuerySerializer(serializers.Serializer):
    # Not ``format``: DRF reserves it for renderer negotiation
    file_format = serializers.ChoiceField(choices=['png', 'svg'], default='png')


class QrDeleteResultSerializer(serializers.Serializer):
    message = serializers.CharField()
    soft_deleted = serializers.BooleanField()


# ============================================
# Public tip page context
# ============================================

class PublicVenueSerializer(serializers.ModelSerializer):
    class Meta:
        model = Venue
        fields = ['id', 'name', 'type', 'logo_url', 'distribution_mode', 'allow_staff_choice']
        read_only_fields = fields


class PublicQrCodeSerializer(serializers.ModelSerializer):
    class Meta:
        model = QrCode
        fields = ['id', 'short_code', 'type', 'label']
        read_only_fields = fields


class PublicStaffSerializer(serializers.ModelSerializer):
    class Meta:
        model = Staff
        fields = ['id', 'display_name', 'role', 'avatar_url']
        read_only_fields = fields


class TipContextSerializer(serializers.Serializer):
    """Everything the guest tipping page needs for one short code."""

    qr_code = PublicQrCodeSerializer()
    venue = PublicVenueSerializer()
    staff = PublicStaffSerializer(allow_null=True)
    available_staff = PublicStaffSerializer(many=True)
