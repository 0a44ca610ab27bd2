from django.contrib import admin

from .models import Payout, TipAllocation


class TipAllocationInline(admin.TabularInline):
    model = TipAllocation
    extra = 0
    fields = ['staff', 'tip', 'amount', 'date', 'status', 'paid_at']
    readonly_fields = fields
    can_delete = False


@admin.register(Payout)
class PayoutAdmin(admin.ModelAdmin):
    list_display = ['venue', 'period_start', 'period_end', 'total_amount', 'status', 'paid_at']
    list_filter = ['status', 'period_end']
    search_fields = ['venue__name']
    raw_id_fields = ['venue']
    inlines = [TipAllocationInline]


@admin.register(TipAllocation)
class TipAllocationAdmin(admin.ModelAdmin):
    list_display = ['staff', 'tip', 'amount', 'date', 'status', 'payout']
    list_filter = ['status', 'date']
    search_fields = ['staff__display_name', 'tip__order_id']
    raw_id_fields = ['tip', 'staff', 'payout']
