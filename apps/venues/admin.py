from django.contrib import admin
from django.utils.html import format_html

from .models import Venue, VenueStatus, Staff, QrCode


class StaffInline(admin.TabularInline):
    model = Staff
    extra = 0
    fields = ['display_name', 'role', 'participates_in_pool', 'status']
    show_change_link = True


@admin.register(Venue)
class VenueAdmin(admin.ModelAdmin):
    list_display = [
        'name',
        'type',
        'manager',
        'status_badge',
        'gateway_status',
        'distribution_mode',
        'created_at',
    ]
    list_filter = ['status', 'type', 'distribution_mode', 'midtrans_connected', 'midtrans_environment']
    search_fields = ['name', 'manager__email', 'midtrans_merchant_id']
    readonly_fields = ['id', 'created_at', 'updated_at']
    inlines = [StaffInline]

    fieldsets = (
        ('Venue', {
            'fields': ('id', 'name', 'type', 'manager', 'status', 'address', 'phone', 'email', 'logo_url', 'timezone')
        }),
        ('Tip distribution', {
            'fields': ('distribution_mode', 'allow_staff_choice')
        }),
        ('Midtrans', {
            'fields': ('midtrans_connected', 'midtrans_environment', 'midtrans_merchant_id', 'midtrans_client_key'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def status_badge(self, obj):
        colors = {
            VenueStatus.DRAFT: '#9E9E9E',
            VenueStatus.ACTIVE: '#6B8E5E',
            VenueStatus.BLOCKED: '#B85C5C',
        }
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#ccc'), obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'


@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ['display_name', 'venue', 'role', 'participates_in_pool', 'status', 'created_at']
    list_filter = ['role', 'status', 'participates_in_pool']
    search_fields = ['display_name', 'full_name', 'venue__name']
    raw_id_fields = ['venue', 'user']


@admin.register(QrCode)
class QrCodeAdmin(admin.ModelAdmin):
    list_display = ['short_code', 'type', 'label', 'venue', 'staff', 'status', 'created_at']
    list_filter = ['type', 'status']
    search_fields = ['short_code', 'label', 'venue__name']
    raw_id_fields = ['venue']
    readonly_fields = ['short_code', 'staff']
