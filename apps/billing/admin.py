from django.contrib import admin
from apps.billing.models import Bill, BillItem, Payment, PaymentAllocation


class BillItemInline(admin.TabularInline):
    model = BillItem
    extra = 0
    fields = ['category_name', 'unit_price', 'quantity', 'amount']


class PaymentAllocationInline(admin.TabularInline):
    model = PaymentAllocation
    extra = 0
    fields = ['bill', 'amount', 'previous_balance', 'new_balance', 'bill_status']
    readonly_fields = fields


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    """Admin interface for bills."""

    list_display = [
        'number',
        'entity_type',
        'period_year',
        'period_month',
        'total_amount',
        'paid_amount',
        'balance_amount',
        'status',
    ]
    list_filter = ['status', 'entity_type', 'period_year', 'period_month', 'is_consolidated']
    search_fields = ['number']
    inlines = [BillItemInline]
    readonly_fields = ['total_amount', 'balance_amount', 'generated_at']


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['date', 'entity_type', 'amount', 'method', 'reference']
    list_filter = ['method', 'entity_type']
    search_fields = ['reference', 'notes']
    date_hierarchy = 'date'
    inlines = [PaymentAllocationInline]
