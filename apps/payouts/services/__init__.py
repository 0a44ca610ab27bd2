from .exceptions import (
    PayoutsServiceError,
    PayoutStaffNotFoundError,
    NothingToPayError,
)

from .allocation import split_amount, pool_participants, allocate_tip

from .payout_management import (
    build_payout_report,
    get_payout_report,
    mark_paid,
)

__all__ = [
    # Exceptions
    'PayoutsServiceError',
    'PayoutStaffNotFoundError',
    'NothingToPayError',
    # Allocation
    'split_amount',
    'pool_participants',
    'allocate_tip',
    # Payouts
    'build_payout_report',
    'get_payout_report',
    'mark_paid',
]
