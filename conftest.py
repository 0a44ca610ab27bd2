"""
Fixtures shared by every app's test suite.

Venue-scoped fixtures build one ACTIVE venue connected to the Midtrans
sandbox (``venue``) managed by ``manager``, and a DRAFT venue without
payments (``draft_venue``) managed by ``other_manager``.
"""

import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.context import RequestContext
from apps.accounts.models import User, UserRole
from apps.tips.models import Tip, TipStatus, TipType
from apps.tips.services import compute_fee_split
from apps.venues.models import (
    Venue, VenueStatus, VenueType, GatewayEnvironment,
    Staff, StaffRole, QrCode, QrType,
)

TEST_SERVER_KEY = 'SB-Mid-server-test-key'


def _authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass123!',
        display_name='Platform Admin',
        role=UserRole.ADMIN,
    )


@pytest.fixture
def manager(db):
    return User.objects.create_user(
        email='manager@example.com',
        password='ManagerPass123!',
        display_name='Venue Manager',
        role=UserRole.MANAGER,
    )


@pytest.fixture
def other_manager(db):
    return User.objects.create_user(
        email='other@example.com',
        password='OtherPass123!',
        display_name='Other Manager',
        role=UserRole.MANAGER,
    )


@pytest.fixture
def admin_client(admin_user):
    return _authenticate(APIClient(), admin_user)


@pytest.fixture
def manager_client(manager):
    return _authenticate(APIClient(), manager)


@pytest.fixture
def other_manager_client(other_manager):
    return _authenticate(APIClient(), other_manager)


@pytest.fixture
def admin_ctx(admin_user):
    return RequestContext(user_id=admin_user.id, role=admin_user.role)


@pytest.fixture
def manager_ctx(manager):
    return RequestContext(user_id=manager.id, role=manager.role)


@pytest.fixture
def other_manager_ctx(other_manager):
    return RequestContext(user_id=other_manager.id, role=other_manager.role)


@pytest.fixture
def venue(manager):
    """Active venue with a sandbox Midtrans connection."""
    return Venue.objects.create(
        name='Cafe Organic',
        type=VenueType.CAFE,
        manager=manager,
        status=VenueStatus.ACTIVE,
        midtrans_connected=True,
        midtrans_merchant_id='G123456789',
        midtrans_server_key=TEST_SERVER_KEY,
        midtrans_client_key='SB-Mid-client-test-key',
        midtrans_environment=GatewayEnvironment.SANDBOX,
    )


@pytest.fixture
def draft_venue(other_manager):
    """Freshly registered venue; payments not connected."""
    return Venue.objects.create(
        name='Warung Baru',
        type=VenueType.RESTAURANT,
        manager=other_manager,
    )


@pytest.fixture
def make_staff(venue):
    """Factory: staff member of ``venue`` with a personal QR code."""
    def _make_staff(display_name, short_code=None, **extra):
        staff = Staff.objects.create(
            venue=extra.pop('venue', venue),
            display_name=display_name,
            role=extra.pop('role', StaffRole.WAITER),
            **extra
        )
        QrCode.objects.create(
            venue=staff.venue,
            staff=staff,
            type=QrType.PERSONAL,
            label=display_name,
            short_code=short_code or f'{display_name.lower()}001',
        )
        return staff
    return _make_staff


@pytest.fixture
def staff_member(make_staff):
    return make_staff('Agung')


@pytest.fixture
def table_qr(venue):
    return QrCode.objects.create(
        venue=venue,
        type=QrType.TABLE,
        label='Table 1',
        short_code='table001',
    )


@pytest.fixture
def make_tip(venue, table_qr):
    """Factory: tip on ``table_qr`` (or a given QR) with fee split applied."""
    counter = {'n': 0}

    def _make_tip(amount=50000, status=TipStatus.PAID, qr_code=None, staff=None,
                  guest_pays_fee=False, paid_at=None, **extra):
        counter['n'] += 1
        qr_code = qr_code or table_qr
        split = compute_fee_split(amount, guest_pays_fee)
        if status == TipStatus.PAID and paid_at is None:
            paid_at = timezone.now()
        return Tip.objects.create(
            venue=qr_code.venue,
            qr_code=qr_code,
            staff=staff,
            type=TipType.PERSONAL if staff else TipType.POOL,
            status=status,
            amount=split.amount,
            platform_fee=split.platform_fee,
            net_amount=split.net_amount,
            total_amount=split.total_amount,
            guest_pays_fee=guest_pays_fee,
            order_id=extra.pop('order_id', f'TIP-test-{counter["n"]:04d}'),
            paid_at=paid_at,
            **extra
        )
    return _make_tip
