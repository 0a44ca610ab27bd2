import pytest
from django.test import RequestFactory
from django.contrib.auth.models import AnonymousUser

from apps.accounts.context import RequestContext, GUEST_ROLE
from apps.accounts.models import UserRole


@pytest.mark.django_db
class TestRequestContext:

    def test_from_anonymous_request_is_guest(self):
        request = RequestFactory().get('/')
        request.user = AnonymousUser()

        ctx = RequestContext.from_request(request)

        assert ctx.role == GUEST_ROLE
        assert ctx.is_authenticated is False
        assert ctx.is_admin is False

    def test_from_authenticated_request(self, manager):
        request = RequestFactory().get('/')
        request.user = manager

        ctx = RequestContext.from_request(request)

        assert ctx.user_id == manager.id
        assert ctx.role == UserRole.MANAGER

    def test_manager_manages_only_own_venue(self, manager_ctx, venue, draft_venue):
        assert manager_ctx.can_manage_venue(venue) is True
        assert manager_ctx.can_manage_venue(draft_venue) is False

    def test_admin_manages_every_venue(self, admin_ctx, venue, draft_venue):
        assert admin_ctx.can_manage_venue(venue) is True
        assert admin_ctx.can_manage_venue(draft_venue) is True

    def test_guest_manages_nothing(self, venue):
        assert RequestContext.guest().can_manage_venue(venue) is False
