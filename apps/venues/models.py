from django.db import models
import uuid


class VenueStatus(models.TextChoices):
    DRAFT = 'DRAFT', 'Draft'
    ACTIVE = 'ACTIVE', 'Active'
    BLOCKED = 'BLOCKED', 'Blocked'


class VenueType(models.TextChoices):
    RESTAURANT = 'RESTAURANT', 'Restaurant'
    CAFE = 'CAFE', 'Cafe'
    BAR = 'BAR', 'Bar'
    COFFEE_SHOP = 'COFFEE_SHOP', 'Coffee shop'
    OTHER = 'OTHER', 'Other'


class DistributionMode(models.TextChoices):
    PERSONAL = 'PERSONAL', 'Personal'
    POOLED = 'POOLED', 'Pooled'


class GatewayEnvironment(models.TextChoices):
    SANDBOX = 'sandbox', 'Sandbox'
    PRODUCTION = 'production', 'Production'


class GatewayStatus(models.TextChoices):
    """Derived, never stored: how the venue's Midtrans account is wired."""
    LIVE = 'LIVE', 'Live'
    TEST = 'TEST', 'Test'
    NOT_CONNECTED = 'NOT_CONNECTED', 'Not connected'


class Venue(models.Model):
    """A restaurant, cafe or bar that accepts tips."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    type = models.CharField(max_length=20, choices=VenueType.choices, default=VenueType.OTHER)
    address = models.CharField(max_length=300, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    email = models.EmailField(blank=True)
    logo_url = models.URLField(blank=True)
    timezone = models.CharField(max_length=64, default='Asia/Makassar')

    manager = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='managed_venues'
    )

    status = models.CharField(
        max_length=20,
        choices=VenueStatus.choices,
        default=VenueStatus.DRAFT
    )

    # Tip distribution
    distribution_mode = models.CharField(
        max_length=20,
        choices=DistributionMode.choices,
        default=DistributionMode.PERSONAL
    )
    allow_staff_choice = models.BooleanField(default=False)

    # Midtrans merchant account (payments go straight to the venue)
    midtrans_connected = models.BooleanField(default=False)
    midtrans_merchant_id = models.CharField(max_length=100, blank=True)
    midtrans_server_key = models.CharField(max_length=200, blank=True)
    midtrans_client_key = models.CharField(max_length=200, blank=True)
    midtrans_environment = models.CharField(
        max_length=20,
        choices=GatewayEnvironment.choices,
        default=GatewayEnvironment.SANDBOX
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'venues'
        indexes = [
            models.Index(fields=['status'], name='venues_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    @property
    def is_accepting_tips(self):
        return self.status == VenueStatus.ACTIVE and self.midtrans_connected

    @property
    def gateway_status(self):
        if not (self.midtrans_connected and self.midtrans_merchant_id):
            return GatewayStatus.NOT_CONNECTED
        if self.midtrans_environment == GatewayEnvironment.PRODUCTION:
            return GatewayStatus.LIVE
        return GatewayStatus.TEST


class StaffRole(models.TextChoices):
    WAITER = 'WAITER', 'Waiter'
    BARTENDER = 'BARTENDER', 'Bartender'
    BARISTA = 'BARISTA', 'Barista'
    HOSTESS = 'HOSTESS', 'Hostess'
    OTHER = 'OTHER', 'Other'


class StaffStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', 'Active'
    INACTIVE = 'INACTIVE', 'Inactive'


class Staff(models.Model):
    """A tippable team member of exactly one venue."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    venue = models.ForeignKey(
        Venue,
        on_delete=models.CASCADE,
        related_name='staff'
    )
    # Optional login account (phone or email)
    user = models.OneToOneField(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='staff_profile'
    )

    display_name = models.CharField(max_length=100)
    full_name = models.CharField(max_length=200, blank=True)
    role = models.CharField(max_length=20, choices=StaffRole.choices, default=StaffRole.OTHER)
    avatar_url = models.URLField(blank=True)

    participates_in_pool = models.BooleanField(default=True)
    status = models.CharField(
        max_length=20,
        choices=StaffStatus.choices,
        default=StaffStatus.ACTIVE
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'staff'
        verbose_name_plural = 'staff'
        indexes = [
            models.Index(fields=['venue', 'status'], name='staff_venue_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.display_name} ({self.venue.name})"

    @property
    def is_active(self):
        return self.status == StaffStatus.ACTIVE


class QrType(models.TextChoices):
    PERSONAL = 'PERSONAL', 'Personal'
    TABLE = 'TABLE', 'Table'
    VENUE = 'VENUE', 'Venue'


class QrStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', 'Active'
    INACTIVE = 'INACTIVE', 'Inactive'


class QrCode(models.Model):
    """Printable QR code pointing at the public tipping page."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    venue = models.ForeignKey(
        Venue,
        on_delete=models.CASCADE,
        related_name='qr_codes'
    )
    # Only set for PERSONAL codes; fixed at creation
    staff = models.OneToOneField(
        Staff,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='qr_code'
    )

    short_code = models.CharField(max_length=32, unique=True)
    type = models.CharField(max_length=20, choices=QrType.choices)
    label = models.CharField(max_length=100, blank=True)
    status = models.CharField(
        max_length=20,
        choices=QrStatus.choices,
        default=QrStatus.ACTIVE
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'qr_codes'
        indexes = [
            models.Index(fields=['venue', 'type'], name='qr_codes_venue_type_idx'),
        ]
        ordering = ['type', '-created_at']

    def __str__(self):
        return f"{self.label or self.short_code} ({self.type})"

    @property
    def is_active(self):
        return self.status == QrStatus.ACTIVE
