"""
Domain-specific exceptions for venues app.

These exceptions represent business rule violations. They are DRF
``APIException`` subclasses whose ``default_code`` is the API error code,
so views can let them propagate to the exception handler.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class VenuesServiceError(APIException):
    """Base exception for all venues service errors."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Venue operation failed.'
    default_code = 'VALIDATION_ERROR'


class VenueNotFoundError(VenuesServiceError):
    """Raised when a venue does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Venue not found.'
    default_code = 'NOT_FOUND'


class StaffNotFoundError(VenuesServiceError):
    """Raised when a staff member does not exist in the venue."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Staff member not found.'
    default_code = 'NOT_FOUND'


class QrCodeNotFoundError(VenuesServiceError):
    """Raised when a QR code does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'QR code not found.'
    default_code = 'NOT_FOUND'


class VenueAccessDeniedError(VenuesServiceError):
    """Raised when the caller neither manages the venue nor is an admin."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Access denied.'
    default_code = 'FORBIDDEN'


class VenueStateError(VenuesServiceError):
    """Raised when venue, QR or payment status forbids the operation."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Operation not allowed in the current state.'
    default_code = 'STATE_ERROR'


class PaymentNotConfiguredError(VenueStateError):
    """Raised when the venue has no confirmed Midtrans connection."""
    default_detail = 'Please connect Midtrans before creating QR codes.'


class PersonalQrDeletionError(VenueStateError):
    """Raised when deleting a personal QR code directly."""
    default_detail = (
        'Personal QR codes cannot be deleted directly. '
        'Deactivate the staff member instead.'
    )


class InactiveQrCodeError(VenueStateError):
    """Raised when a QR code is deactivated."""
    default_detail = 'This QR code has been deactivated.'


class InactiveStaffQrError(VenueStateError):
    """Raised when activating the personal QR of an inactive staff member."""
    default_detail = 'Reactivate the staff member to reactivate their QR code.'


class VenueNotAcceptingTipsError(VenueStateError):
    """Raised when a venue is not active."""
    default_detail = 'This venue is not accepting tips at the moment.'


class DuplicateContactError(VenuesServiceError):
    """Raised when a staff phone/email already belongs to another account."""
    default_detail = 'A user with this phone or email already exists.'
