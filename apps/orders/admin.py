from django.contrib import admin
from apps.orders.models import DailyOrder, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ['customer', 'category', 'meal_type', 'bag_format', 'total_count', 'total_amount']
    readonly_fields = ['total_count', 'total_amount']


@admin.register(DailyOrder)
class DailyOrderAdmin(admin.ModelAdmin):
    """Admin interface for daily orders."""

    list_display = ['date', 'driver', 'status', 'total_food', 'total_amount']
    list_filter = ['status', 'date', 'driver']
    date_hierarchy = 'date'
    inlines = [OrderItemInline]
    readonly_fields = ['total_veg_food', 'total_non_veg_food', 'total_food', 'total_amount']
