from .exceptions import (
    TipsServiceError,
    InvalidTipAmountError,
    StaffNotAvailableError,
    TipNotFoundError,
    PaymentGatewayError,
    InvalidSignatureError,
)

from .fees import FeeSplit, platform_fee_for, compute_fee_split, max_tip_amount

from .tip_intake import generate_order_id, create_tip

from .reconciliation import (
    map_gateway_status,
    apply_gateway_status,
    handle_notification,
    get_tip_by_order_id,
    sync_tip_status,
)

__all__ = [
    # Exceptions
    'TipsServiceError',
    'InvalidTipAmountError',
    'StaffNotAvailableError',
    'TipNotFoundError',
    'PaymentGatewayError',
    'InvalidSignatureError',
    # Fees
    'FeeSplit',
    'platform_fee_for',
    'compute_fee_split',
    'max_tip_amount',
    # Intake
    'generate_order_id',
    'create_tip',
    # Reconciliation
    'map_gateway_status',
    'apply_gateway_status',
    'handle_notification',
    'get_tip_by_order_id',
    'sync_tip_status',
]
