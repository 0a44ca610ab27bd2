import pytest
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import User, UserRole
from apps.venues.models import Venue, VenueStatus


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_creates_manager_and_draft_venue(self, api_client):
        """Registration creates a manager together with a DRAFT venue."""
        url = reverse('users:register')
        data = {
            'email': 'owner@example.com',
            'password': 'secret1',
            'venue_name': 'Cafe Organic',
            'venue_type': 'CAFE',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']

        user = User.objects.get(email='owner@example.com')
        assert user.role == UserRole.MANAGER
        venue = Venue.objects.get(id=response.data['venue_id'])
        assert venue.manager == user
        assert venue.status == VenueStatus.DRAFT
        assert venue.midtrans_connected is False

    def test_register_duplicate_email(self, api_client, manager):
        """Cannot register with an existing email."""
        url = reverse('users:register')
        data = {
            'email': manager.email,
            'password': 'secret1',
            'venue_name': 'Second Venue',
            'venue_type': 'BAR',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'VALIDATION_ERROR'
        assert Venue.objects.filter(name='Second Venue').count() == 0

    def test_register_short_password(self, api_client):
        """Password shorter than 6 characters is rejected."""
        url = reverse('users:register')
        data = {
            'email': 'short@example.com',
            'password': '12345',
            'venue_name': 'Cafe',
            'venue_type': 'CAFE',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'VALIDATION_ERROR'
        assert 'at least 6 characters' in response.data['message']

    def test_register_invalid_venue_type(self, api_client):
        url = reverse('users:register')
        data = {
            'email': 'type@example.com',
            'password': 'secret1',
            'venue_name': 'Cafe',
            'venue_type': 'SPACESHIP',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not User.objects.filter(email='type@example.com').exists()


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, manager):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'manager@example.com',
            'password': 'ManagerPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['role'] == UserRole.MANAGER
        assert 'access' in response.data['tokens']

        manager.refresh_from_db()
        assert manager.last_login is not None

    def test_login_is_case_insensitive_on_email(self, api_client, manager):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'MANAGER@example.com',
            'password': 'ManagerPass123!',
        })

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, api_client, manager):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'manager@example.com',
            'password': 'wrong',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['code'] == 'AUTH_REQUIRED'

    def test_login_unknown_email(self, api_client, db):
        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'nobody@example.com',
            'password': 'whatever',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_account(self, api_client, manager):
        manager.is_active = False
        manager.save()

        url = reverse('users:login')
        response = api_client.post(url, {
            'email': 'manager@example.com',
            'password': 'ManagerPass123!',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'FORBIDDEN'


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/me/"""

    def test_get_current_user(self, manager_client, manager):
        url = reverse('users:current-user')
        response = manager_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == manager.email
        assert response.data['role'] == UserRole.MANAGER

    def test_unauthenticated(self, api_client):
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['code'] == 'AUTH_REQUIRED'
