"""
Domain-specific exceptions for accounts services.

Each exception carries its error code as ``default_code`` so the API
exception handler can render it without a per-view mapping.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class AccountsServiceError(APIException):
    """Base exception for accounts services."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Account operation failed.'
    default_code = 'VALIDATION_ERROR'


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    default_detail = 'Registration failed.'


class DuplicateEmailError(UserRegistrationError):
    """Raised when the email is already registered."""
    default_detail = 'User with this email already exists.'


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Invalid email or password.'
    default_code = 'AUTH_REQUIRED'


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Account is deactivated.'
    default_code = 'FORBIDDEN'
