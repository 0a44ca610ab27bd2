"""
Staff management service.

Staff members always own exactly one PERSONAL QR code, created in the
same transaction and kept in step with the staff status.
"""

import logging
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Count, Q

from apps.accounts.context import RequestContext
from apps.accounts.models import UserRole
from apps.venues.models import (
    Staff,
    StaffStatus,
    QrCode,
    QrStatus,
    QrType,
)

from .exceptions import StaffNotFoundError, DuplicateContactError
from .qr_management import generate_short_code
from .venue_management import get_venue, ensure_can_manage

User = get_user_model()

logger = logging.getLogger(__name__)

UPDATABLE_STAFF_FIELDS = (
    'display_name',
    'full_name',
    'role',
    'avatar_url',
    'participates_in_pool',
    'status',
)


def list_staff(*, actor: RequestContext, venue_id: UUID):
    """
    Staff of a venue with their personal QR and tip count.

    Returns:
        QuerySet of Staff annotated with ``tips_count``.
    """
    venue = get_venue(actor=actor, venue_id=venue_id)
    return (
        Staff.objects
        .filter(venue=venue)
        .select_related('qr_code', 'user')
        .annotate(tips_count=Count('tips'))
        .order_by('-created_at')
    )


def get_staff(*, actor: RequestContext, staff_id: UUID, for_update: bool = False) -> Staff:
    queryset = Staff.objects.select_related('venue')
    if for_update:
        queryset = queryset.select_for_update()
    try:
        staff = queryset.get(id=staff_id)
    except (Staff.DoesNotExist, ValueError):
        raise StaffNotFoundError()

    ensure_can_manage(actor, staff.venue)
    return staff


def _create_staff_user(*, phone: str, email: str, display_name: str):
    """Create a passwordless STAFF login account for phone/email contact."""
    if not phone and not email:
        return None

    duplicates = Q()
    if phone:
        duplicates |= Q(phone=phone)
    if email:
        duplicates |= Q(email__iexact=email)
    if User.objects.filter(duplicates).exists():
        raise DuplicateContactError()

    return User.objects.create_user(
        email=email or None,
        phone=phone or None,
        display_name=display_name,
        role=UserRole.STAFF,
    )


@transaction.atomic
def create_staff(
    *,
    actor: RequestContext,
    venue_id: UUID,
    display_name: str,
    role: str,
    full_name: str = "",
    phone: str = "",
    email: str = "",
    participates_in_pool: bool = True,
    avatar_url: str = ""
) -> Staff:
    """
    Add a staff member together with their personal QR code.

    Args:
        actor: Caller context (venue manager or admin)
        venue_id: Venue the staff member belongs to
        display_name: Name shown to guests
        role: One of StaffRole values
        phone/email: Optional contact; creates a linked STAFF user

    Returns:
        Staff: Created staff member (``qr_code`` populated)

    Raises:
        DuplicateContactError: If phone/email is already registered
    """
    venue = get_venue(actor=actor, venue_id=venue_id)

    user = _create_staff_user(phone=phone, email=email, display_name=display_name)

    staff = Staff.objects.create(
        venue=venue,
        user=user,
        display_name=display_name,
        full_name=full_name,
        role=role,
        participates_in_pool=participates_in_pool,
        avatar_url=avatar_url,
    )

    QrCode.objects.create(
        venue=venue,
        staff=staff,
        type=QrType.PERSONAL,
        label=display_name,
        short_code=generate_short_code(),
    )

    logger.info("Staff %s added to venue %s", staff.id, venue.id)
    return staff


@transaction.atomic
def update_staff(*, actor: RequestContext, staff_id: UUID, **changes) -> Staff:
    """
    Partially update a staff member.

    Changing status also toggles the personal QR code so a deactivated
    staff member cannot receive tips.
    """
    staff = get_staff(actor=actor, staff_id=staff_id, for_update=True)

    fields = [name for name in UPDATABLE_STAFF_FIELDS if name in changes]
    for name in fields:
        setattr(staff, name, changes[name])
    if fields:
        staff.save(update_fields=fields + ['updated_at'])

    if 'status' in fields:
        qr_status = QrStatus.ACTIVE if staff.status == StaffStatus.ACTIVE else QrStatus.INACTIVE
        QrCode.objects.filter(staff=staff, type=QrType.PERSONAL).update(status=qr_status)

    return staff
