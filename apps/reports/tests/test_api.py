import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status


@pytest.mark.django_db
class TestVenueDashboardApi:
    """Tests for GET /api/venues/dashboard/"""

    def test_dashboard(self, manager_client, venue, staff_member, paid_tip):
        paid_tip(amount=50000, staff=staff_member, qr_code=staff_member.qr_code)

        response = manager_client.get(reverse('reports:venue-dashboard'), {'period': 'today'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['venue']['name'] == 'Cafe Organic'
        assert response.data['period'] == 'today'
        assert response.data['stats']['total_tips'] == 47500

    def test_defaults_to_week(self, manager_client, venue):
        response = manager_client.get(reverse('reports:venue-dashboard'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['period'] == 'week'

    def test_invalid_period(self, manager_client, venue):
        response = manager_client.get(reverse('reports:venue-dashboard'), {'period': 'decade'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'VALIDATION_ERROR'

    def test_manager_without_venue(self, admin_client):
        response = admin_client.get(reverse('reports:venue-dashboard'))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_other_venue_forbidden(self, other_manager_client, venue):
        response = other_manager_client.get(
            reverse('reports:venue-dashboard'),
            {'venue_id': str(venue.id)},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestAdminApi:
    """Tests for /api/admin/*"""

    @pytest.mark.parametrize('name', [
        'reports:admin-stats',
        'reports:admin-venues',
        'reports:admin-transactions',
    ])
    def test_manager_forbidden(self, manager_client, name):
        response = manager_client.get(reverse(name))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'FORBIDDEN'

    @pytest.mark.parametrize('name', [
        'reports:admin-stats',
        'reports:admin-venues',
        'reports:admin-transactions',
    ])
    def test_unauthenticated(self, api_client, name):
        response = api_client.get(reverse(name))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_stats(self, admin_client, venue, make_tip):
        make_tip(amount=50000)

        response = admin_client.get(reverse('reports:admin-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_volume'] == 50000

    def test_venues(self, admin_client, venue, draft_venue):
        response = admin_client.get(reverse('reports:admin-venues'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 2

    def test_transactions(self, admin_client, make_tip):
        make_tip(order_id='TIP-x1')

        response = admin_client.get(reverse('reports:admin-transactions'), {'status': 'PAID'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['order_id'] == 'TIP-x1'

    def test_transactions_limit_bounds(self, admin_client):
        response = admin_client.get(reverse('reports:admin-transactions'), {'limit': 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_commissions(self, admin_client, make_tip):
        make_tip(amount=50000)
        make_tip(amount=100000)
        today = timezone.localdate().isoformat()

        response = admin_client.get(reverse('reports:admin-commissions'), {'start': today, 'end': today})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_tips'] == 142500
        assert response.data['total_platform_fee'] == 7125

    def test_commissions_require_dates(self, admin_client):
        response = admin_client.get(reverse('reports:admin-commissions'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'start and end dates required' in response.data['message']

    def test_commissions_manager_forbidden(self, manager_client):
        today = timezone.localdate().isoformat()

        response = manager_client.get(reverse('reports:admin-commissions'), {'start': today, 'end': today})

        assert response.status_code == status.HTTP_403_FORBIDDEN
