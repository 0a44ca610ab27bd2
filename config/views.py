import logging

from django.conf import settings
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.shortcuts import render

from apps.accounts.models import User
from apps.tips.services import TipNotFoundError, get_tip_by_order_id
from apps.venues.models import Venue, QrCode
from apps.venues.services import VenuesServiceError, resolve_short_code
from apps.tips.models import Tip

from config.exceptions import ErrorCode

logger = logging.getLogger(__name__)


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'code': ErrorCode.NOT_FOUND,
        'message': 'Not found',
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'code': ErrorCode.INTERNAL_ERROR,
        'message': 'Internal server error',
    }, status=500)


def health_check(request):
    """Database connectivity and record counts."""
    checks = {
        'database': {'connected': False, 'error': None},
        'counts': None,
    }

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        checks['database']['connected'] = True
        checks['counts'] = {
            'users': User.objects.count(),
            'venues': Venue.objects.count(),
            'qr_codes': QrCode.objects.count(),
            'tips': Tip.objects.count(),
        }
    except DatabaseError as e:
        logger.error("Health check failed: %s", e)
        checks['database']['error'] = str(e)

    healthy = checks['database']['connected']
    checks['status'] = 'ok' if healthy else 'error'
    return JsonResponse(checks, status=200 if healthy else 503)


# ============================================
# Guest tipping pages
# ============================================

def tip_page(request, short_code):
    """Tipping form for a scanned QR code."""
    try:
        context = resolve_short_code(short_code=short_code)
    except VenuesServiceError as e:
        return render(
            request,
            'tips/error.html',
            {'message': str(e.detail)},
            status=e.status_code,
        )

    context.update({
        'short_code': short_code,
        'min_amount': settings.MIN_TIP_AMOUNT,
        'fee_percent': settings.PLATFORM_FEE_PERCENT,
        'currency': settings.TIP_CURRENCY,
        'preset_amounts': [10000, 20000, 50000, 100000],
    })
    return render(request, 'tips/tip.html', context)


def _tip_for_page(request):
    order_id = request.GET.get('order_id', '')
    if not order_id:
        return order_id, None
    try:
        return order_id, get_tip_by_order_id(order_id)
    except TipNotFoundError:
        return order_id, None


def tip_success_page(request):
    order_id, tip = _tip_for_page(request)
    return render(request, 'tips/success.html', {'order_id': order_id, 'tip': tip})


def tip_pending_page(request):
    order_id, tip = _tip_for_page(request)
    return render(request, 'tips/pending.html', {
        'order_id': order_id,
        'tip': tip,
        'poll_interval_ms': settings.TIP_STATUS_POLL_INTERVAL_MS,
        'max_polls': settings.TIP_STATUS_MAX_POLLS,
    })


def tip_error_page(request):
    order_id, tip = _tip_for_page(request)
    return render(request, 'tips/error.html', {
        'order_id': order_id,
        'tip': tip,
        'message': 'Payment was not completed.',
    })


# ============================================
# Venue dashboard & admin console
# ============================================

def venue_dashboard_page(request):
    """Shell page; data comes from the JSON API with the stored JWT."""
    return render(request, 'dashboard/venue.html', {'currency': settings.TIP_CURRENCY})


def admin_console_page(request):
    return render(request, 'dashboard/admin.html', {'currency': settings.TIP_CURRENCY})
