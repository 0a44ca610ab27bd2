"""
Domain-specific exceptions for tips app.

DRF ``APIException`` subclasses; ``default_code`` is the API error code.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class TipsServiceError(APIException):
    """Base exception for all tips service errors."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Tip operation failed.'
    default_code = 'VALIDATION_ERROR'


class InvalidTipAmountError(TipsServiceError):
    """Raised when the amount is below the minimum tip."""
    default_detail = 'Minimum tip amount is 1,000 IDR'


class StaffNotAvailableError(TipsServiceError):
    """Raised when a guest picks staff who can't receive tips at this venue."""
    default_detail = 'Selected staff member is not available.'


class TipNotFoundError(TipsServiceError):
    """Raised when no tip exists for an order id."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Tip not found.'
    default_code = 'NOT_FOUND'


class PaymentGatewayError(TipsServiceError):
    """Raised when Midtrans could not open a payment."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Failed to create payment'
    default_code = 'INTERNAL_ERROR'


class InvalidSignatureError(TipsServiceError):
    """Raised when a notification signature does not match."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Invalid signature.'
    default_code = 'FORBIDDEN'
