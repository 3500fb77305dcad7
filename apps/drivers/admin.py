from django.contrib import admin
from apps.drivers.models import Driver


@admin.register(Driver)
class DriverAdmin(admin.ModelAdmin):
    """Admin interface for drivers."""

    list_display = ['name', 'route', 'phone', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'route', 'phone', 'email']
    ordering = ['name']
