"""
Tip intake workflow.

Resolves the paying context from a short code, records a PENDING tip and
opens a Midtrans Snap payment with the venue's own credentials.
"""

import logging
import secrets
import time
from uuid import UUID

from django.conf import settings

from apps.tips.gateway import MidtransClient, GatewayError
from apps.tips.models import Tip, TipStatus, TipType
from apps.venues.models import QrType, Staff, StaffStatus
from apps.venues.services import get_active_qr_code

from .exceptions import (
    InvalidTipAmountError,
    StaffNotAvailableError,
    PaymentGatewayError,
)
from .fees import compute_fee_split, max_tip_amount

logger = logging.getLogger(__name__)


def generate_order_id(venue_id: UUID) -> str:
    """``TIP-<venue prefix>-<epoch ms>-<random hex>``, unique per attempt."""
    venue_prefix = str(venue_id).replace('-', '')[:8]
    return f"TIP-{venue_prefix}-{int(time.time() * 1000)}-{secrets.token_hex(3)}"


def _resolve_target(qr_code, staff_id, requested_type):
    """
    Pick who the tip is for.

    Personal QR always targets its staff; otherwise a guest-chosen active
    staff member of the venue, or the pool.
    """
    if qr_code.type == QrType.PERSONAL and qr_code.staff_id:
        return qr_code.staff, TipType.PERSONAL

    if staff_id and requested_type != TipType.POOL:
        try:
            staff = Staff.objects.get(
                id=staff_id,
                venue=qr_code.venue,
                status=StaffStatus.ACTIVE,
            )
        except Staff.DoesNotExist:
            raise StaffNotAvailableError()
        return staff, TipType.PERSONAL

    return None, TipType.POOL


def _callback_urls(order_id: str) -> dict:
    base = settings.APP_BASE_URL
    return {
        'finish': f"{base}/tip/success?order_id={order_id}",
        'error': f"{base}/tip/error?order_id={order_id}",
        'pending': f"{base}/tip/pending?order_id={order_id}",
    }


def create_tip(
    *,
    short_code: str,
    amount: int,
    guest_pays_fee: bool = False,
    staff_id: UUID = None,
    type: str = None,
    client: MidtransClient = None
) -> dict:
    """
    Create a pending tip and open a Midtrans Snap transaction.

    The tip row is committed before Midtrans is called. When the gateway
    call fails, the tip is marked FAILED and PaymentGatewayError is raised.

    Args:
        short_code: QR short code the guest scanned
        amount: Tip amount in minor units (payer-exclusive)
        guest_pays_fee: Guest covers the platform fee on top of amount
        staff_id: Optional staff picked by the guest (non-personal QR)
        type: Optional requested target type (PERSONAL/POOL)
        client: Midtrans client override (tests)

    Returns:
        dict: ``tip``, ``order_id``, ``snap_token``, ``redirect_url``

    Raises:
        InvalidTipAmountError: Amount below MIN_TIP_AMOUNT or above max_tip_amount()
        QrCodeNotFoundError / VenueStateError: From QR resolution
        StaffNotAvailableError: Guest-picked staff invalid
        PaymentGatewayError: Midtrans call failed
    """
    if amount is None or amount < settings.MIN_TIP_AMOUNT:
        raise InvalidTipAmountError(
            f"Minimum tip amount is {settings.MIN_TIP_AMOUNT:,} {settings.TIP_CURRENCY}"
        )

    max_amount = max_tip_amount()
    if amount > max_amount:
        raise InvalidTipAmountError(
            f"Maximum tip amount is {max_amount:,} {settings.TIP_CURRENCY}"
        )

    qr_code = get_active_qr_code(short_code)
    venue = qr_code.venue
    staff, tip_type = _resolve_target(qr_code, staff_id, type)

    split = compute_fee_split(amount, guest_pays_fee)
    order_id = generate_order_id(venue.id)

    tip = Tip.objects.create(
        venue=venue,
        qr_code=qr_code,
        staff=staff,
        type=tip_type,
        status=TipStatus.PENDING,
        amount=split.amount,
        platform_fee=split.platform_fee,
        net_amount=split.net_amount,
        total_amount=split.total_amount,
        guest_pays_fee=guest_pays_fee,
        currency=settings.TIP_CURRENCY,
        order_id=order_id,
    )
    logger.info(
        "Tip %s created: venue=%s type=%s amount=%s total=%s",
        order_id, venue.id, tip_type, split.amount, split.total_amount
    )

    if client is None:
        client = MidtransClient.for_venue(venue)

    try:
        snap = client.create_snap_transaction(
            order_id=order_id,
            gross_amount=split.total_amount,
            item_details=[{
                'id': 'tip',
                'name': 'Tip for Staff' if staff else 'Tip for Team',
                'price': split.total_amount,
                'quantity': 1,
            }],
            callbacks=_callback_urls(order_id),
        )
    except GatewayError as e:
        logger.error("Midtrans Snap failed for %s: %s", order_id, e)
        Tip.objects.filter(id=tip.id, status=TipStatus.PENDING).update(status=TipStatus.FAILED)
        raise PaymentGatewayError()

    tip.snap_token = snap['token']
    tip.save(update_fields=['snap_token', 'updated_at'])

    return {
        'tip': tip,
        'order_id': order_id,
        'snap_token': snap['token'],
        'redirect_url': snap['redirect_url'],
    }
