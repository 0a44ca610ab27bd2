"""
Server-rendered guest pages and the health endpoint.
"""

import pytest
from django.urls import reverse

from apps.tips.models import TipStatus
from apps.venues.models import QrCode, QrStatus


@pytest.mark.django_db
class TestTipPage:
    """Tests for /tip/{short_code}"""

    def test_renders_tip_form(self, client, staff_member):
        response = client.get(reverse('tip-page', kwargs={'short_code': 'agung001'}))

        assert response.status_code == 200
        content = response.content.decode()
        assert 'Cafe Organic' in content
        assert 'Agung' in content
        assert '/api/tips/' in content

    def test_unknown_code(self, client, db):
        response = client.get(reverse('tip-page', kwargs={'short_code': 'missing1'}))

        assert response.status_code == 404
        assert 'QR code not found.' in response.content.decode()

    def test_inactive_code(self, client, table_qr):
        QrCode.objects.filter(id=table_qr.id).update(status=QrStatus.INACTIVE)

        response = client.get(reverse('tip-page', kwargs={'short_code': 'table001'}))

        assert response.status_code == 409
        assert 'deactivated' in response.content.decode()

    def test_fixed_paths_are_not_short_codes(self, client, db):
        response = client.get(reverse('tip-success'))

        assert response.status_code == 200
        assert 'Thank you' in response.content.decode()


@pytest.mark.django_db
class TestResultPages:

    def test_success_shows_reference(self, client, make_tip):
        make_tip(order_id='TIP-page1')

        response = client.get(reverse('tip-success'), {'order_id': 'TIP-page1'})

        assert response.status_code == 200
        assert 'Reference: TIP-page1' in response.content.decode()

    def test_pending_page_polls_status(self, client, make_tip):
        make_tip(order_id='TIP-page2', status=TipStatus.PENDING)

        response = client.get(reverse('tip-pending'), {'order_id': 'TIP-page2'})

        content = response.content.decode()
        assert response.status_code == 200
        assert 'var POLL_INTERVAL = 3000;' in content
        assert 'var MAX_POLLS = 60;' in content
        assert 'Payment verification timed out. Please check your payment app.' in content

    def test_error_page_unknown_order(self, client, db):
        response = client.get(reverse('tip-error'), {'order_id': 'TIP-none'})

        assert response.status_code == 200
        assert 'Payment was not completed.' in response.content.decode()


@pytest.mark.django_db
class TestHealthCheck:

    def test_healthy(self, client, venue):
        response = client.get(reverse('health-check'))

        assert response.status_code == 200
        data = response.json()
        assert data['status'] == 'ok'
        assert data['database']['connected'] is True
        assert data['counts']['venues'] == 1
