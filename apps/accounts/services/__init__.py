"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InactiveAccountError,
)
from .user_registration import register_venue_manager
from .user_authentication import authenticate_user, issue_tokens

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'DuplicateEmailError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    # Services
    'register_venue_manager',
    'authenticate_user',
    'issue_tokens',
]
