"""
QR code management service.

Handles table/venue QR creation, status changes, deletion rules and the
public short code resolution used by the guest tipping page.
"""

import logging
import secrets
import string
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import Count

from apps.accounts.context import RequestContext
from apps.venues.models import (
    QrCode,
    QrStatus,
    QrType,
    Staff,
    StaffStatus,
    Venue,
    VenueStatus,
)

from .exceptions import (
    QrCodeNotFoundError,
    PaymentNotConfiguredError,
    PersonalQrDeletionError,
    InactiveQrCodeError,
    InactiveStaffQrError,
    VenueNotAcceptingTipsError,
    VenuesServiceError,
)
from .venue_management import get_venue, ensure_can_manage

logger = logging.getLogger(__name__)

SHORT_CODE_ALPHABET = string.ascii_lowercase + string.digits
SHORT_CODE_LENGTH = 8
MAX_SHORT_CODE_ATTEMPTS = 10

CREATABLE_QR_TYPES = (QrType.TABLE, QrType.VENUE)


def generate_short_code(length: int = SHORT_CODE_LENGTH) -> str:
    """Random lowercase alphanumeric code not yet used by any QR."""
    for _ in range(MAX_SHORT_CODE_ATTEMPTS):
        code = ''.join(secrets.choice(SHORT_CODE_ALPHABET) for _ in range(length))
        if not QrCode.objects.filter(short_code=code).exists():
            return code
    raise RuntimeError("Could not generate a unique QR short code")


def build_tip_url(short_code: str) -> str:
    return f"{settings.APP_BASE_URL}/tip/{short_code}"


def list_qr_codes(*, actor: RequestContext, venue_id: UUID):
    """QR codes of a venue with ``tips_count``, ordered by type then newest."""
    venue = get_venue(actor=actor, venue_id=venue_id)
    return (
        QrCode.objects
        .filter(venue=venue)
        .select_related('staff')
        .annotate(tips_count=Count('tips'))
        .order_by('type', '-created_at')
    )


def get_qr_code(*, actor: RequestContext, qr_id: UUID, for_update: bool = False) -> QrCode:
    queryset = QrCode.objects.select_related('venue', 'staff')
    if for_update:
        queryset = queryset.select_for_update(of=('self',))
    try:
        qr_code = queryset.get(id=qr_id)
    except (QrCode.DoesNotExist, ValueError):
        raise QrCodeNotFoundError()

    ensure_can_manage(actor, qr_code.venue)
    return qr_code


@transaction.atomic
def create_qr_code(*, actor: RequestContext, venue_id: UUID, type: str, label: str) -> QrCode:
    """
    Create a TABLE or VENUE QR code.

    Raises:
        VenuesServiceError: If type is PERSONAL (created with staff only)
        PaymentNotConfiguredError: If Midtrans is not connected
    """
    if type not in CREATABLE_QR_TYPES:
        raise VenuesServiceError('Only TABLE and VENUE QR codes can be created.')

    venue = get_venue(actor=actor, venue_id=venue_id)
    if not venue.midtrans_connected:
        raise PaymentNotConfiguredError()

    qr_code = QrCode.objects.create(
        venue=venue,
        type=type,
        label=label,
        short_code=generate_short_code(),
    )
    logger.info("QR %s (%s) created for venue %s", qr_code.short_code, type, venue.id)
    return qr_code


@transaction.atomic
def set_qr_status(*, actor: RequestContext, qr_id: UUID, status: str) -> QrCode:
    qr_code = get_qr_code(actor=actor, qr_id=qr_id, for_update=True)
    if (
        status == QrStatus.ACTIVE
        and qr_code.type == QrType.PERSONAL
        and qr_code.staff.status != StaffStatus.ACTIVE
    ):
        raise InactiveStaffQrError()

    qr_code.status = status
    qr_code.save(update_fields=['status', 'updated_at'])
    return qr_code


@transaction.atomic
def delete_qr_code(*, actor: RequestContext, qr_id: UUID) -> dict:
    """
    Delete a QR code, or deactivate it when tips reference it.

    Returns:
        dict: ``{'soft_deleted': bool}``

    Raises:
        PersonalQrDeletionError: For PERSONAL codes
    """
    qr_code = get_qr_code(actor=actor, qr_id=qr_id, for_update=True)

    if qr_code.type == QrType.PERSONAL:
        raise PersonalQrDeletionError()

    if qr_code.tips.exists():
        qr_code.status = QrStatus.INACTIVE
        qr_code.save(update_fields=['status', 'updated_at'])
        logger.info("QR %s deactivated instead of deleted (has tips)", qr_code.short_code)
        return {'soft_deleted': True}

    qr_code.delete()
    return {'soft_deleted': False}


def available_staff_for(venue: Venue):
    """Active pool-participating staff a guest may pick, by display name."""
    return (
        Staff.objects
        .filter(
            venue=venue,
            status=StaffStatus.ACTIVE,
            participates_in_pool=True,
        )
        .order_by('display_name')
    )


def get_active_qr_code(short_code: str) -> QrCode:
    """
    Public lookup of a QR code that can currently take tips.

    Raises:
        QrCodeNotFoundError: Unknown short code
        InactiveQrCodeError: QR deactivated
        VenueNotAcceptingTipsError: Venue not ACTIVE
        PaymentNotConfiguredError: Venue has no Midtrans connection
    """
    try:
        qr_code = (
            QrCode.objects
            .select_related('venue', 'staff')
            .get(short_code=short_code)
        )
    except QrCode.DoesNotExist:
        raise QrCodeNotFoundError()

    if qr_code.status != QrStatus.ACTIVE:
        raise InactiveQrCodeError()
    if qr_code.venue.status != VenueStatus.ACTIVE:
        raise VenueNotAcceptingTipsError()
    if not qr_code.venue.midtrans_connected:
        raise PaymentNotConfiguredError('This venue has not set up payments yet.')
    return qr_code


def resolve_short_code(*, short_code: str) -> dict:
    """
    Resolve a short code into the context rendered on the tipping page.

    Returns:
        dict with ``qr_code``, ``venue``, ``staff`` (fixed target for
        personal codes, else None) and ``available_staff`` (list).
    """
    qr_code = get_active_qr_code(short_code)
    venue = qr_code.venue

    available_staff = []
    if qr_code.type != QrType.PERSONAL and venue.allow_staff_choice:
        available_staff = list(available_staff_for(venue))

    return {
        'qr_code': qr_code,
        'venue': venue,
        'staff': qr_code.staff if qr_code.type == QrType.PERSONAL else None,
        'available_staff': available_staff,
    }
