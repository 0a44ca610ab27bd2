"""Venue manager registration service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model

from apps.accounts.models import UserRole
from apps.venues.models import Venue, VenueStatus

from .exceptions import DuplicateEmailError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_venue_manager(
    *,
    email: str,
    password: str,
    venue_name: str,
    venue_type: str,
    display_name: str = ""
):
    """
    Register a venue manager together with their venue.

    The user and the venue are created in one transaction; the venue
    starts in DRAFT until a payment gateway is connected.

    Args:
        email: Manager's email address
        password: Manager's password (will be hashed)
        venue_name: Name of the venue
        venue_type: One of VenueType values
        display_name: Optional display name

    Returns:
        Tuple of (User, Venue)

    Raises:
        DuplicateEmailError: If the email is already registered
    """
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise DuplicateEmailError()

    user = User.objects.create_user(
        email=email,
        password=password,
        display_name=display_name,
        role=UserRole.MANAGER,
    )

    venue = Venue.objects.create(
        name=venue_name,
        type=venue_type,
        manager=user,
        status=VenueStatus.DRAFT,
    )

    logger.info("Registered manager %s with venue %s", user.id, venue.id)
    return user, venue
