from django.core.validators import MinValueValidator
from django.db import models
import uuid


class TipType(models.TextChoices):
    PERSONAL = 'PERSONAL', 'Personal'
    POOL = 'POOL', 'Pool'


class TipStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    PAID = 'PAID', 'Paid'
    FAILED = 'FAILED', 'Failed'


class Tip(models.Model):
    """
    A guest tip paid through the venue's Midtrans account.

    Amounts are integer minor units of ``currency``. ``amount`` is the tip
    itself (payer-exclusive): ``net_amount + platform_fee == amount``.
    ``total_amount`` is what the guest is charged.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    venue = models.ForeignKey(
        'venues.Venue',
        on_delete=models.CASCADE,
        related_name='tips'
    )
    # RESTRICT: a QR with tips can't be deleted on its own, only with its venue
    qr_code = models.ForeignKey(
        'venues.QrCode',
        on_delete=models.RESTRICT,
        related_name='tips'
    )
    staff = models.ForeignKey(
        'venues.Staff',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tips'
    )

    type = models.CharField(max_length=20, choices=TipType.choices)
    status = models.CharField(
        max_length=20,
        choices=TipStatus.choices,
        default=TipStatus.PENDING
    )

    # Money
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    platform_fee = models.PositiveIntegerField()
    net_amount = models.PositiveIntegerField()
    total_amount = models.PositiveIntegerField()
    guest_pays_fee = models.BooleanField(default=False)
    currency = models.CharField(max_length=3, default='IDR')

    # Midtrans
    order_id = models.CharField(max_length=64, unique=True)
    snap_token = models.CharField(max_length=255, blank=True)
    payment_type = models.CharField(max_length=50, blank=True)
    gateway_status = models.CharField(max_length=30, blank=True)

    # Timestamps
    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tips'
        indexes = [
            models.Index(fields=['venue', 'status', 'created_at'], name='tips_venue_status_idx'),
            models.Index(fields=['status', 'created_at'], name='tips_status_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.order_id} {self.amount} {self.currency} ({self.status})"

    @property
    def is_terminal(self):
        return self.status != TipStatus.PENDING


class WebhookLog(models.Model):
    """Raw Midtrans notification, kept for admin inspection."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_id = models.CharField(max_length=64, db_index=True)
    transaction_status = models.CharField(max_length=30, blank=True)
    fraud_status = models.CharField(max_length=30, blank=True)
    payload = models.JSONField(default=dict)

    signature_valid = models.BooleanField(default=False)
    processed = models.BooleanField(default=False)
    error = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'webhook_logs'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.order_id}: {self.transaction_status}"
