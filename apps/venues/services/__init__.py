from .exceptions import (
    VenuesServiceError,
    VenueNotFoundError,
    StaffNotFoundError,
    QrCodeNotFoundError,
    VenueAccessDeniedError,
    VenueStateError,
    PaymentNotConfiguredError,
    PersonalQrDeletionError,
    InactiveQrCodeError,
    InactiveStaffQrError,
    VenueNotAcceptingTipsError,
    DuplicateContactError,
)

from .venue_management import (
    ensure_can_manage,
    get_venue,
    get_current_venue,
    resolve_venue,
    get_venue_overview,
    update_venue,
    get_venue_settings,
    update_venue_settings,
    connect_midtrans,
    set_venue_status,
)

from .qr_management import (
    generate_short_code,
    build_tip_url,
    list_qr_codes,
    get_qr_code,
    create_qr_code,
    set_qr_status,
    delete_qr_code,
    available_staff_for,
    get_active_qr_code,
    resolve_short_code,
)

from .staff_management import (
    list_staff,
    get_staff,
    create_staff,
    update_staff,
)

from .qr_images import render_qr_image, content_type_for

__all__ = [
    # Exceptions
    'VenuesServiceError',
    'VenueNotFoundError',
    'StaffNotFoundError',
    'QrCodeNotFoundError',
    'VenueAccessDeniedError',
    'VenueStateError',
    'PaymentNotConfiguredError',
    'PersonalQrDeletionError',
    'InactiveQrCodeError',
    'InactiveStaffQrError',
    'VenueNotAcceptingTipsError',
    'DuplicateContactError',
    # Venues
    'ensure_can_manage',
    'get_venue',
    'get_current_venue',
    'resolve_venue',
    'get_venue_overview',
    'update_venue',
    'get_venue_settings',
    'update_venue_settings',
    'connect_midtrans',
    'set_venue_status',
    # QR codes
    'generate_short_code',
    'build_tip_url',
    'list_qr_codes',
    'get_qr_code',
    'create_qr_code',
    'set_qr_status',
    'delete_qr_code',
    'available_staff_for',
    'get_active_qr_code',
    'resolve_short_code',
    'render_qr_image',
    'content_type_for',
    # Staff
    'list_staff',
    'get_staff',
    'create_staff',
    'update_staff',
]
