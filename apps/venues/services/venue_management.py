"""
Venue management service.

Handles venue lookup with tenant checks, profile/settings updates,
Midtrans connection and admin status changes.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Count

from apps.accounts.context import RequestContext
from apps.venues.models import Venue, VenueStatus

from .exceptions import (
    VenueNotFoundError,
    VenueAccessDeniedError,
    VenueStateError,
)

logger = logging.getLogger(__name__)

UPDATABLE_VENUE_FIELDS = (
    'name',
    'type',
    'address',
    'phone',
    'email',
    'logo_url',
    'timezone',
    'distribution_mode',
    'allow_staff_choice',
)

ADMIN_SETTABLE_STATUSES = (VenueStatus.ACTIVE, VenueStatus.BLOCKED)


def ensure_can_manage(actor: RequestContext, venue: Venue) -> None:
    """Raise VenueAccessDeniedError unless actor manages venue or is admin."""
    if not actor.can_manage_venue(venue):
        raise VenueAccessDeniedError()


def get_venue(*, actor: RequestContext, venue_id: UUID, for_update: bool = False) -> Venue:
    """
    Fetch a venue the caller is allowed to manage.

    Raises:
        VenueNotFoundError: If venue doesn't exist
        VenueAccessDeniedError: If caller is not manager or admin
    """
    queryset = Venue.objects.all()
    if for_update:
        queryset = queryset.select_for_update()
    try:
        venue = queryset.get(id=venue_id)
    except (Venue.DoesNotExist, ValueError):
        raise VenueNotFoundError()

    ensure_can_manage(actor, venue)
    return venue


def get_current_venue(*, actor: RequestContext) -> Venue:
    """Return the venue managed by the caller (oldest first)."""
    venue = (
        Venue.objects
        .filter(manager_id=actor.user_id)
        .order_by('created_at')
        .first()
    )
    if venue is None:
        raise VenueNotFoundError()
    return venue


def resolve_venue(*, actor: RequestContext, venue_id=None) -> Venue:
    """Explicit venue when given, otherwise the caller's own venue."""
    if venue_id:
        return get_venue(actor=actor, venue_id=venue_id)
    return get_current_venue(actor=actor)


def get_venue_overview(*, actor: RequestContext, venue_id: UUID) -> Venue:
    """Venue with tip and QR counts annotated (``tips_count``, ``qr_codes_count``)."""
    venue = get_venue(actor=actor, venue_id=venue_id)
    counts = Venue.objects.filter(id=venue.id).aggregate(
        tips_count=Count('tips', distinct=True),
        qr_codes_count=Count('qr_codes', distinct=True),
    )
    venue.tips_count = counts['tips_count']
    venue.qr_codes_count = counts['qr_codes_count']
    return venue


@transaction.atomic
def update_venue(*, actor: RequestContext, venue_id: UUID, **changes) -> Venue:
    """
    Partially update venue profile fields.

    Unknown keys are ignored; only UPDATABLE_VENUE_FIELDS are written.
    """
    venue = get_venue(actor=actor, venue_id=venue_id, for_update=True)

    fields = [name for name in UPDATABLE_VENUE_FIELDS if name in changes]
    for name in fields:
        setattr(venue, name, changes[name])

    if fields:
        venue.save(update_fields=fields + ['updated_at'])
    return venue


def get_venue_settings(*, actor: RequestContext, venue_id: UUID) -> dict:
    """Tip distribution and payment connection settings."""
    venue = get_venue(actor=actor, venue_id=venue_id)
    return {
        'distribution_mode': venue.distribution_mode,
        'allow_staff_choice': venue.allow_staff_choice,
        'midtrans_connected': venue.midtrans_connected,
        'midtrans_merchant_id': venue.midtrans_merchant_id or None,
        'midtrans_environment': venue.midtrans_environment,
    }


def update_venue_settings(
    *,
    actor: RequestContext,
    venue_id: UUID,
    distribution_mode: str = None,
    allow_staff_choice: bool = None
) -> dict:
    changes = {}
    if distribution_mode:
        changes['distribution_mode'] = distribution_mode
    if allow_staff_choice is not None:
        changes['allow_staff_choice'] = allow_staff_choice

    update_venue(actor=actor, venue_id=venue_id, **changes)
    return get_venue_settings(actor=actor, venue_id=venue_id)


@transaction.atomic
def connect_midtrans(
    *,
    actor: RequestContext,
    venue_id: UUID,
    merchant_id: str,
    server_key: str,
    client_key: str,
    environment: str
) -> Venue:
    """
    Store the venue's own Midtrans credentials and mark payment as connected.

    A DRAFT venue becomes ACTIVE once connected; a BLOCKED venue stays blocked.
    """
    venue = get_venue(actor=actor, venue_id=venue_id, for_update=True)

    venue.midtrans_merchant_id = merchant_id
    venue.midtrans_server_key = server_key
    venue.midtrans_client_key = client_key
    venue.midtrans_environment = environment
    venue.midtrans_connected = True
    if venue.status == VenueStatus.DRAFT:
        venue.status = VenueStatus.ACTIVE

    venue.save()
    logger.info("Midtrans connected for venue %s (%s)", venue.id, environment)
    return venue


@transaction.atomic
def set_venue_status(*, actor: RequestContext, venue_id: UUID, status: str) -> Venue:
    """
    Admin-only: activate or block a venue.

    Raises:
        VenueAccessDeniedError: If caller is not an admin
        VenueNotFoundError: If venue doesn't exist
        VenueStateError: If status is not ACTIVE or BLOCKED
    """
    if not actor.is_admin:
        raise VenueAccessDeniedError('Admin access required.')

    if status not in ADMIN_SETTABLE_STATUSES:
        raise VenueStateError('Invalid status. Must be ACTIVE or BLOCKED.')

    venue = get_venue(actor=actor, venue_id=venue_id, for_update=True)
    previous = venue.status
    venue.status = status
    venue.save(update_fields=['status', 'updated_at'])

    logger.info("Venue %s status %s -> %s by %s", venue.id, previous, status, actor.user_id)
    return venue
