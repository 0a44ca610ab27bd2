"""
Payment status reconciliation.

Webhook notifications and guest polling both funnel into
:func:`apply_gateway_status`, a compare-and-set on (order id, PENDING):
only the first terminal status wins, later or duplicate notifications
are recorded but never move a PAID/FAILED tip.
"""

import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone

from apps.payouts.services import allocate_tip
from apps.tips.gateway import MidtransClient, GatewayError
from apps.tips.models import Tip, TipStatus, WebhookLog

from .exceptions import TipNotFoundError, InvalidSignatureError

logger = logging.getLogger(__name__)

PAID_STATUSES = {'settlement', 'capture'}
FAILED_STATUSES = {'deny', 'cancel', 'expire', 'failure'}


def map_gateway_status(transaction_status: str, fraud_status: str = None) -> Optional[str]:
    """
    Map Midtrans ``transaction_status`` onto TipStatus.

    Returns None when the tip should stay as it is (pending, challenge,
    unknown values).
    """
    if transaction_status == 'capture':
        # Card captures flagged by fraud detection wait for manual review
        if fraud_status and fraud_status != 'accept':
            return None
        return TipStatus.PAID
    if transaction_status in PAID_STATUSES:
        return TipStatus.PAID
    if transaction_status in FAILED_STATUSES:
        return TipStatus.FAILED
    return None


@transaction.atomic
def apply_gateway_status(*, order_id: str, gateway_data: dict) -> bool:
    """
    Move a PENDING tip to its terminal status.

    Args:
        order_id: Tip order id
        gateway_data: Midtrans status payload (notification or status API)

    Returns:
        bool: True if this call performed the transition.
    """
    transaction_status = gateway_data.get('transaction_status', '')
    new_status = map_gateway_status(transaction_status, gateway_data.get('fraud_status'))
    if new_status is None:
        return False

    changes = {
        'status': new_status,
        'gateway_status': transaction_status,
        'payment_type': gateway_data.get('payment_type', ''),
        'updated_at': timezone.now(),
    }
    if new_status == TipStatus.PAID:
        changes['paid_at'] = timezone.now()

    updated = Tip.objects.filter(order_id=order_id, status=TipStatus.PENDING).update(**changes)
    if not updated:
        logger.info("Tip %s already settled, ignoring %s", order_id, transaction_status)
        return False

    logger.info("Tip %s -> %s (%s)", order_id, new_status, transaction_status)

    if new_status == TipStatus.PAID:
        allocate_tip(tip=Tip.objects.select_related('venue').get(order_id=order_id))
    return True


def handle_notification(*, payload: dict) -> WebhookLog:
    """
    Process a Midtrans HTTP notification.

    Every notification is stored in WebhookLog, including rejected ones.

    Raises:
        TipNotFoundError: Unknown order id
        InvalidSignatureError: Signature doesn't match the venue's server key
    """
    order_id = str(payload.get('order_id', ''))
    log = WebhookLog.objects.create(
        order_id=order_id,
        transaction_status=payload.get('transaction_status', ''),
        fraud_status=payload.get('fraud_status') or '',
        payload=payload,
    )

    tip = Tip.objects.select_related('venue').filter(order_id=order_id).first()
    if tip is None:
        log.error = 'Unknown order id'
        log.save(update_fields=['error'])
        logger.warning("Midtrans notification for unknown order %s", order_id)
        raise TipNotFoundError()

    client = MidtransClient.for_venue(tip.venue)
    if not client.verify_signature(payload):
        log.error = 'Invalid signature'
        log.save(update_fields=['error'])
        logger.warning("Midtrans notification with invalid signature for %s", order_id)
        raise InvalidSignatureError()

    log.signature_valid = True
    apply_gateway_status(order_id=order_id, gateway_data=payload)
    log.processed = True
    log.save(update_fields=['signature_valid', 'processed'])
    return log


def get_tip_by_order_id(order_id: str) -> Tip:
    try:
        return Tip.objects.select_related('venue', 'staff').get(order_id=order_id)
    except Tip.DoesNotExist:
        raise TipNotFoundError()


def sync_tip_status(*, order_id: str, client: MidtransClient = None) -> Tip:
    """
    Status lookup used by the guest polling page.

    A PENDING tip is refreshed from the Midtrans status API first. Gateway
    errors are logged and the stored status is returned.
    """
    tip = get_tip_by_order_id(order_id)
    if tip.status != TipStatus.PENDING or not tip.venue.midtrans_server_key:
        return tip

    if client is None:
        client = MidtransClient.for_venue(tip.venue)

    try:
        gateway_data = client.get_transaction_status(order_id)
    except GatewayError as e:
        logger.warning("Midtrans status check failed for %s: %s", order_id, e)
        return tip

    if apply_gateway_status(order_id=order_id, gateway_data=gateway_data):
        tip.refresh_from_db()
    return tip
