from django.db import models
import uuid


class PayoutStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    PAID = 'PAID', 'Paid'


class Payout(models.Model):
    """
    Batch of staff allocations for one venue and period.

    Marking a payout paid is advisory only; money is moved by the venue
    outside the platform.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    venue = models.ForeignKey(
        'venues.Venue',
        on_delete=models.CASCADE,
        related_name='payouts'
    )
    period_start = models.DateField()
    period_end = models.DateField()

    total_amount = models.PositiveIntegerField(default=0)
    status = models.CharField(
        max_length=20,
        choices=PayoutStatus.choices,
        default=PayoutStatus.PENDING
    )
    paid_at = models.DateTimeField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payouts'
        constraints = [
            models.UniqueConstraint(
                fields=['venue', 'period_start', 'period_end'],
                name='unique_payout_period_per_venue'
            ),
        ]
        ordering = ['-period_end']

    def __str__(self):
        return f"{self.venue} {self.period_start}..{self.period_end} ({self.status})"


class TipAllocation(models.Model):
    """Share of one paid tip credited to one staff member."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    tip = models.ForeignKey(
        'tips.Tip',
        on_delete=models.CASCADE,
        related_name='allocations'
    )
    staff = models.ForeignKey(
        'venues.Staff',
        on_delete=models.CASCADE,
        related_name='allocations'
    )
    payout = models.ForeignKey(
        Payout,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='allocations'
    )

    amount = models.PositiveIntegerField()
    # Local business date of the payment
    date = models.DateField()
    status = models.CharField(
        max_length=20,
        choices=PayoutStatus.choices,
        default=PayoutStatus.PENDING
    )
    paid_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'tip_allocations'
        constraints = [
            models.UniqueConstraint(
                fields=['tip', 'staff'],
                name='unique_allocation_per_tip_staff'
            ),
        ]
        indexes = [
            models.Index(fields=['staff', 'date'], name='allocations_staff_date_idx'),
        ]
        ordering = ['-date']

    def __str__(self):
        return f"{self.staff.display_name}: {self.amount} ({self.status})"
