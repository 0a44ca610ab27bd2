import pytest
from unittest.mock import patch
from django.urls import reverse
from rest_framework import status

from apps.tips.gateway import MidtransClient
from apps.tips.models import Tip, TipStatus, WebhookLog

from .conftest import FakeMidtransClient


@pytest.fixture
def gateway(fake_gateway):
    with patch.object(MidtransClient, 'for_venue', return_value=fake_gateway):
        yield fake_gateway


# =============================================================================
# Tip Creation Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateTip:
    """Tests for POST /api/tips/"""

    def test_create_tip(self, api_client, table_qr, gateway):
        response = api_client.post(reverse('tips:tip-create'), {
            'short_code': 'table001',
            'amount': 50000,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['order_id'].startswith('TIP-')
        assert response.data['snap_token'] == f"snap-{response.data['order_id']}"
        assert response.data['redirect_url'].startswith('https://app.sandbox.midtrans.com/')

        tip = Tip.objects.get(order_id=response.data['order_id'])
        assert tip.status == TipStatus.PENDING
        assert tip.net_amount == 47500

    def test_token_is_ignored_for_guests(self, manager_client, table_qr, gateway):
        response = manager_client.post(reverse('tips:tip-create'), {
            'short_code': 'table001',
            'amount': 20000,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED

    def test_amount_below_minimum(self, api_client, table_qr, gateway):
        response = api_client.post(reverse('tips:tip-create'), {
            'short_code': 'table001',
            'amount': 33,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {
            'code': 'VALIDATION_ERROR',
            'message': 'Minimum tip amount is 1,000 IDR',
        }
        assert Tip.objects.count() == 0

    def test_amount_too_large(self, api_client, table_qr, gateway):
        response = api_client.post(reverse('tips:tip-create'), {
            'short_code': 'table001',
            'amount': 10**20,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'VALIDATION_ERROR'
        assert response.data['message'].startswith('Maximum tip amount is')
        assert Tip.objects.count() == 0

    def test_non_numeric_amount(self, api_client, table_qr, gateway):
        response = api_client.post(reverse('tips:tip-create'), {
            'short_code': 'table001',
            'amount': 'lots',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'VALIDATION_ERROR'

    def test_unknown_short_code(self, api_client, db, gateway):
        response = api_client.post(reverse('tips:tip-create'), {
            'short_code': 'missing1',
            'amount': 20000,
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'NOT_FOUND'

    def test_gateway_failure(self, api_client, table_qr, failing_gateway):
        with patch.object(MidtransClient, 'for_venue', return_value=failing_gateway):
            response = api_client.post(reverse('tips:tip-create'), {
                'short_code': 'table001',
                'amount': 20000,
            }, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'code': 'INTERNAL_ERROR', 'message': 'Failed to create payment'}
        assert Tip.objects.get().status == TipStatus.FAILED


# =============================================================================
# Tip Status Tests
# =============================================================================

@pytest.mark.django_db
class TestTipStatus:
    """Tests for GET /api/tips/{order_id}/"""

    def test_paid_tip(self, api_client, make_tip, staff_member):
        make_tip(order_id='TIP-paid', staff=staff_member, qr_code=staff_member.qr_code)

        response = api_client.get(reverse('tips:tip-status', kwargs={'order_id': 'TIP-paid'}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == TipStatus.PAID
        assert response.data['venue_name'] == 'Cafe Organic'
        assert response.data['staff_name'] == 'Agung'
        assert response.data['poll'] == {'interval_ms': 3000, 'max_polls': 60}

    def test_pending_tip_is_checked_with_midtrans(self, api_client, make_tip):
        make_tip(order_id='TIP-pending', status=TipStatus.PENDING)
        client = FakeMidtransClient(status_response={'transaction_status': 'expire'})

        with patch.object(MidtransClient, 'for_venue', return_value=client):
            response = api_client.get(reverse('tips:tip-status', kwargs={'order_id': 'TIP-pending'}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == TipStatus.FAILED
        assert response.data['staff_name'] is None

    def test_unknown_order(self, api_client, db):
        response = api_client.get(reverse('tips:tip-status', kwargs={'order_id': 'TIP-nope'}))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'NOT_FOUND'


# =============================================================================
# Webhook Tests
# =============================================================================

@pytest.mark.django_db
class TestMidtransWebhook:
    """Tests for POST /api/webhooks/midtrans/"""

    def test_settlement(self, api_client, make_tip, signed_notification):
        tip = make_tip(order_id='TIP-w1', status=TipStatus.PENDING)

        response = api_client.post(
            reverse('tips:midtrans-webhook'),
            signed_notification('TIP-w1', 'settlement'),
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'status': 'ok', 'processed': True}
        tip.refresh_from_db()
        assert tip.status == TipStatus.PAID
        assert tip.payment_type == 'qris'

    def test_out_of_order_notifications(self, api_client, make_tip, signed_notification):
        tip = make_tip(order_id='TIP-w2', status=TipStatus.PENDING)
        url = reverse('tips:midtrans-webhook')

        api_client.post(url, signed_notification('TIP-w2', 'settlement'), format='json')
        response = api_client.post(url, signed_notification('TIP-w2', 'expire'), format='json')

        assert response.status_code == status.HTTP_200_OK
        tip.refresh_from_db()
        assert tip.status == TipStatus.PAID
        assert WebhookLog.objects.filter(order_id='TIP-w2').count() == 2

    def test_invalid_signature(self, api_client, make_tip, signed_notification):
        tip = make_tip(order_id='TIP-w3', status=TipStatus.PENDING)
        payload = signed_notification('TIP-w3', 'settlement')
        payload['gross_amount'] = '1.00'

        response = api_client.post(reverse('tips:midtrans-webhook'), payload, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'FORBIDDEN'
        tip.refresh_from_db()
        assert tip.status == TipStatus.PENDING
        assert WebhookLog.objects.get(order_id='TIP-w3').error == 'Invalid signature'

    def test_unknown_order(self, api_client, db):
        response = api_client.post(
            reverse('tips:midtrans-webhook'),
            {'order_id': 'TIP-ghost', 'transaction_status': 'settlement'},
            format='json',
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert WebhookLog.objects.filter(order_id='TIP-ghost').exists()
