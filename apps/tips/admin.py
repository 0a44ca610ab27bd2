from django.contrib import admin
from django.utils.html import format_html

from .models import Tip, TipStatus, WebhookLog


@admin.register(Tip)
class TipAdmin(admin.ModelAdmin):
    list_display = [
        'order_id',
        'venue',
        'staff',
        'type',
        'amount',
        'platform_fee',
        'total_amount',
        'status_badge',
        'gateway_status',
        'created_at',
    ]
    list_filter = ['status', 'type', 'guest_pays_fee', 'created_at']
    search_fields = ['order_id', 'venue__name', 'staff__display_name']
    date_hierarchy = 'created_at'
    raw_id_fields = ['venue', 'qr_code', 'staff']
    readonly_fields = [
        'order_id',
        'amount',
        'platform_fee',
        'net_amount',
        'total_amount',
        'snap_token',
        'payment_type',
        'gateway_status',
        'paid_at',
        'created_at',
        'updated_at',
    ]

    def status_badge(self, obj):
        colors = {
            TipStatus.PENDING: '#D4A03C',
            TipStatus.PAID: '#6B8E5E',
            TipStatus.FAILED: '#B85C5C',
        }
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#ccc'), obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'


@admin.register(WebhookLog)
class WebhookLogAdmin(admin.ModelAdmin):
    list_display = ['order_id', 'transaction_status', 'fraud_status', 'signature_valid', 'processed', 'created_at']
    list_filter = ['transaction_status', 'signature_valid', 'processed']
    search_fields = ['order_id']
    readonly_fields = [
        'order_id',
        'transaction_status',
        'fraud_status',
        'payload',
        'signature_valid',
        'processed',
        'error',
        'created_at',
    ]
