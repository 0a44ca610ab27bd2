"""Credential checks and JWT issuance for managers and administrators."""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login
from rest_framework_simplejwt.tokens import RefreshToken

from .exceptions import InvalidCredentialsError, InactiveAccountError

logger = logging.getLogger(__name__)

User = get_user_model()


def authenticate_user(*, email: str, password: str):
    """
    Check an email/password pair.

    Emails are matched case-insensitively. Unknown emails and wrong
    passwords raise the same error so a caller cannot probe which
    addresses are registered.

    Raises:
        InvalidCredentialsError: unknown email or wrong password
        InactiveAccountError: the account has been deactivated
    """
    user = User.objects.filter(email__iexact=email.strip()).first()
    if user is None or not user.check_password(password):
        logger.info("Rejected login for %s", email)
        raise InvalidCredentialsError()

    if not user.is_active:
        raise InactiveAccountError()

    update_last_login(None, user)
    return user


def issue_tokens(user) -> dict:
    """Return a fresh access/refresh pair for ``user``."""
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }
