"""
Service layer unit tests for tips app.

Tests cover:
- Tip intake (minimum amount, target resolution, fee handling)
- Gateway failures
- Status mapping and compare-and-set reconciliation
- Webhook logging and signature checks
- Guest status polling
"""

import re
from uuid import UUID, uuid4

import pytest

from apps.payouts.models import TipAllocation
from apps.tips.models import Tip, TipStatus, TipType, WebhookLog
from apps.tips.services import (
    create_tip,
    generate_order_id,
    map_gateway_status,
    apply_gateway_status,
    handle_notification,
    sync_tip_status,
)
from apps.tips.services.exceptions import (
    InvalidTipAmountError,
    StaffNotAvailableError,
    PaymentGatewayError,
    TipNotFoundError,
    InvalidSignatureError,
)
from apps.venues.models import Venue, QrCode, QrStatus, StaffStatus
from apps.venues.services.exceptions import (
    QrCodeNotFoundError,
    InactiveQrCodeError,
    VenueNotAcceptingTipsError,
)

from .conftest import FakeMidtransClient


# =============================================================================
# Tip Intake
# =============================================================================

@pytest.mark.django_db
class TestCreateTip:

    def test_pool_tip_on_table_qr(self, table_qr, fake_gateway):
        result = create_tip(short_code='table001', amount=50000, client=fake_gateway)

        tip = result['tip']
        assert tip.status == TipStatus.PENDING
        assert tip.type == TipType.POOL
        assert tip.staff is None
        assert tip.platform_fee == 2500
        assert tip.net_amount == 47500
        assert tip.total_amount == 50000
        assert tip.snap_token == f"snap-{result['order_id']}"

        call = fake_gateway.snap_calls[0]
        assert call['gross_amount'] == 50000
        assert call['item_details'][0]['name'] == 'Tip for Team'

    def test_guest_pays_fee_charges_total(self, table_qr, fake_gateway):
        result = create_tip(short_code='table001', amount=50000, guest_pays_fee=True, client=fake_gateway)

        assert result['tip'].amount == 50000
        assert result['tip'].total_amount == 52500
        assert fake_gateway.snap_calls[0]['gross_amount'] == 52500

    def test_personal_qr_targets_its_staff(self, staff_member, fake_gateway):
        result = create_tip(short_code='agung001', amount=20000, type=TipType.POOL, client=fake_gateway)

        assert result['tip'].type == TipType.PERSONAL
        assert result['tip'].staff == staff_member
        assert fake_gateway.snap_calls[0]['item_details'][0]['name'] == 'Tip for Staff'

    def test_guest_picks_staff_on_table_qr(self, table_qr, staff_member, fake_gateway):
        result = create_tip(
            short_code='table001',
            amount=20000,
            staff_id=staff_member.id,
            client=fake_gateway,
        )

        assert result['tip'].type == TipType.PERSONAL
        assert result['tip'].staff == staff_member

    def test_pool_type_wins_over_staff_id(self, table_qr, staff_member, fake_gateway):
        result = create_tip(
            short_code='table001',
            amount=20000,
            staff_id=staff_member.id,
            type=TipType.POOL,
            client=fake_gateway,
        )

        assert result['tip'].type == TipType.POOL
        assert result['tip'].staff is None

    def test_inactive_staff_not_available(self, table_qr, make_staff, fake_gateway):
        staff = make_staff('Wayan', status=StaffStatus.INACTIVE)

        with pytest.raises(StaffNotAvailableError):
            create_tip(short_code='table001', amount=20000, staff_id=staff.id, client=fake_gateway)

    def test_staff_of_other_venue_not_available(self, table_qr, make_staff, draft_venue, fake_gateway):
        stranger = make_staff('Putu', venue=draft_venue)

        with pytest.raises(StaffNotAvailableError):
            create_tip(short_code='table001', amount=20000, staff_id=stranger.id, client=fake_gateway)

    @pytest.mark.parametrize('amount', [33, 999, 0, -5000])
    def test_below_minimum(self, table_qr, fake_gateway, amount):
        with pytest.raises(InvalidTipAmountError) as exc_info:
            create_tip(short_code='table001', amount=amount, client=fake_gateway)

        assert str(exc_info.value.detail) == 'Minimum tip amount is 1,000 IDR'
        assert Tip.objects.count() == 0
        assert fake_gateway.snap_calls == []

    def test_above_maximum(self, table_qr, fake_gateway):
        with pytest.raises(InvalidTipAmountError) as exc_info:
            create_tip(short_code='table001', amount=10**20, client=fake_gateway)

        assert str(exc_info.value.detail) == 'Maximum tip amount is 2,045,222,520 IDR'
        assert Tip.objects.count() == 0
        assert fake_gateway.snap_calls == []

    def test_maximum_is_accepted(self, table_qr, fake_gateway):
        result = create_tip(short_code='table001', amount=2045222520, guest_pays_fee=True, client=fake_gateway)

        assert result['tip'].total_amount == 2147483646

    def test_minimum_is_accepted(self, table_qr, fake_gateway):
        result = create_tip(short_code='table001', amount=1000, client=fake_gateway)

        assert result['tip'].platform_fee == 50
        assert result['tip'].net_amount == 950

    def test_unknown_short_code(self, db, fake_gateway):
        with pytest.raises(QrCodeNotFoundError):
            create_tip(short_code='missing1', amount=20000, client=fake_gateway)

    def test_inactive_qr(self, table_qr, fake_gateway):
        QrCode.objects.filter(id=table_qr.id).update(status=QrStatus.INACTIVE)

        with pytest.raises(InactiveQrCodeError):
            create_tip(short_code='table001', amount=20000, client=fake_gateway)
        assert Tip.objects.count() == 0

    def test_blocked_venue(self, venue, table_qr, fake_gateway):
        Venue.objects.filter(id=venue.id).update(status='BLOCKED')

        with pytest.raises(VenueNotAcceptingTipsError):
            create_tip(short_code='table001', amount=20000, client=fake_gateway)

    def test_gateway_failure_marks_tip_failed(self, table_qr, failing_gateway):
        with pytest.raises(PaymentGatewayError):
            create_tip(short_code='table001', amount=20000, client=failing_gateway)

        tip = Tip.objects.get()
        assert tip.status == TipStatus.FAILED
        assert tip.snap_token == ''

    def test_callbacks_point_at_guest_pages(self, table_qr, fake_gateway):
        result = create_tip(short_code='table001', amount=20000, client=fake_gateway)

        callbacks = fake_gateway.snap_calls[0]['callbacks']
        assert callbacks['finish'] == f"http://testserver/tip/success?order_id={result['order_id']}"
        assert callbacks['pending'] == f"http://testserver/tip/pending?order_id={result['order_id']}"
        assert callbacks['error'] == f"http://testserver/tip/error?order_id={result['order_id']}"


class TestOrderId:

    def test_format(self):
        order_id = generate_order_id(UUID('12345678-1234-5678-1234-567812345678'))

        assert re.fullmatch(r'TIP-12345678-\d{13}-[0-9a-f]{6}', order_id)
        assert len(order_id) <= 64

    def test_unique(self):
        venue_id = uuid4()
        assert generate_order_id(venue_id) != generate_order_id(venue_id)


# =============================================================================
# Reconciliation
# =============================================================================

class TestMapGatewayStatus:

    @pytest.mark.parametrize('transaction_status, fraud_status, expected', [
        ('settlement', None, TipStatus.PAID),
        ('capture', 'accept', TipStatus.PAID),
        ('capture', None, TipStatus.PAID),
        ('capture', 'challenge', None),
        ('deny', None, TipStatus.FAILED),
        ('cancel', None, TipStatus.FAILED),
        ('expire', None, TipStatus.FAILED),
        ('failure', None, TipStatus.FAILED),
        ('pending', None, None),
        ('refund', None, None),
        ('', None, None),
    ])
    def test_mapping(self, transaction_status, fraud_status, expected):
        assert map_gateway_status(transaction_status, fraud_status) == expected


@pytest.mark.django_db
class TestApplyGatewayStatus:

    def test_settlement_pays_and_allocates(self, make_tip, staff_member):
        tip = make_tip(status=TipStatus.PENDING, order_id='TIP-a')

        changed = apply_gateway_status(
            order_id='TIP-a',
            gateway_data={'transaction_status': 'settlement', 'payment_type': 'gopay'},
        )

        assert changed is True
        tip.refresh_from_db()
        assert tip.status == TipStatus.PAID
        assert tip.paid_at is not None
        assert tip.payment_type == 'gopay'
        assert tip.gateway_status == 'settlement'
        assert TipAllocation.objects.filter(tip=tip).count() == 1

    def test_failed_never_becomes_paid(self, make_tip):
        tip = make_tip(status=TipStatus.PENDING, order_id='TIP-b')
        apply_gateway_status(order_id='TIP-b', gateway_data={'transaction_status': 'expire'})

        changed = apply_gateway_status(order_id='TIP-b', gateway_data={'transaction_status': 'settlement'})

        assert changed is False
        tip.refresh_from_db()
        assert tip.status == TipStatus.FAILED
        assert tip.paid_at is None

    def test_paid_never_becomes_failed(self, make_tip):
        tip = make_tip(status=TipStatus.PENDING, order_id='TIP-c')
        apply_gateway_status(order_id='TIP-c', gateway_data={'transaction_status': 'settlement'})

        changed = apply_gateway_status(order_id='TIP-c', gateway_data={'transaction_status': 'cancel'})

        assert changed is False
        tip.refresh_from_db()
        assert tip.status == TipStatus.PAID

    def test_pending_leaves_tip_unchanged(self, make_tip):
        tip = make_tip(status=TipStatus.PENDING, order_id='TIP-d')

        assert apply_gateway_status(order_id='TIP-d', gateway_data={'transaction_status': 'pending'}) is False
        tip.refresh_from_db()
        assert tip.status == TipStatus.PENDING
        assert tip.gateway_status == ''


@pytest.mark.django_db
class TestHandleNotification:

    def test_valid_settlement(self, make_tip, signed_notification):
        tip = make_tip(status=TipStatus.PENDING, order_id='TIP-n1')

        log = handle_notification(payload=signed_notification('TIP-n1', 'settlement'))

        assert log.signature_valid is True
        assert log.processed is True
        tip.refresh_from_db()
        assert tip.status == TipStatus.PAID

    def test_duplicate_notification_is_logged_not_reapplied(self, make_tip, staff_member, signed_notification):
        tip = make_tip(status=TipStatus.PENDING, order_id='TIP-n2')
        payload = signed_notification('TIP-n2', 'settlement')

        handle_notification(payload=payload)
        handle_notification(payload=payload)

        assert WebhookLog.objects.filter(order_id='TIP-n2').count() == 2
        assert TipAllocation.objects.filter(tip=tip).count() == 1

    def test_unknown_order(self, db):
        with pytest.raises(TipNotFoundError):
            handle_notification(payload={'order_id': 'TIP-ghost', 'transaction_status': 'settlement'})

        log = WebhookLog.objects.get(order_id='TIP-ghost')
        assert log.processed is False
        assert log.error == 'Unknown order id'

    def test_invalid_signature(self, make_tip, signed_notification):
        tip = make_tip(status=TipStatus.PENDING, order_id='TIP-n3')
        payload = signed_notification('TIP-n3', 'settlement')
        payload['signature_key'] = 'f' * 128

        with pytest.raises(InvalidSignatureError):
            handle_notification(payload=payload)

        tip.refresh_from_db()
        assert tip.status == TipStatus.PENDING
        log = WebhookLog.objects.get(order_id='TIP-n3')
        assert log.signature_valid is False
        assert log.error == 'Invalid signature'


@pytest.mark.django_db
class TestSyncTipStatus:

    def test_pending_tip_is_refreshed(self, make_tip):
        make_tip(status=TipStatus.PENDING, order_id='TIP-s1')
        client = FakeMidtransClient(status_response={'transaction_status': 'settlement', 'payment_type': 'qris'})

        tip = sync_tip_status(order_id='TIP-s1', client=client)

        assert client.status_calls == ['TIP-s1']
        assert tip.status == TipStatus.PAID

    def test_terminal_tip_skips_gateway(self, make_tip):
        make_tip(status=TipStatus.PAID, order_id='TIP-s2')
        client = FakeMidtransClient()

        tip = sync_tip_status(order_id='TIP-s2', client=client)

        assert client.status_calls == []
        assert tip.status == TipStatus.PAID

    def test_gateway_error_returns_stored_status(self, make_tip, failing_gateway):
        make_tip(status=TipStatus.PENDING, order_id='TIP-s3')

        tip = sync_tip_status(order_id='TIP-s3', client=failing_gateway)

        assert tip.status == TipStatus.PENDING

    def test_unknown_order(self, db):
        with pytest.raises(TipNotFoundError):
            sync_tip_status(order_id='TIP-nope', client=FakeMidtransClient())
