"""
Domain-specific exceptions for payouts app.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class PayoutsServiceError(APIException):
    """Base exception for all payouts service errors."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Payout operation failed.'
    default_code = 'VALIDATION_ERROR'


class PayoutStaffNotFoundError(PayoutsServiceError):
    """Raised when the staff member is not part of the venue."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Staff member not found.'
    default_code = 'NOT_FOUND'


class NothingToPayError(PayoutsServiceError):
    """Raised when a period has no allocations to mark paid."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'No tips to pay out for this period.'
    default_code = 'STATE_ERROR'
