from django.contrib import admin
from apps.customers.models import Company, Customer, CustomerPackage


class CustomerPackageInline(admin.TabularInline):
    """Inline admin for subscribed packages."""
    model = CustomerPackage
    extra = 1
    fields = ['category', 'unit_price']


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """Admin interface for customers."""

    list_display = [
        'name',
        'driver',
        'company',
        'billing_type',
        'lunch_bag_format',
        'dinner_bag_format',
        'is_active',
    ]
    list_filter = ['is_active', 'billing_type', 'driver']
    search_fields = ['name', 'address', 'phone', 'email']
    inlines = [CustomerPackageInline]
    ordering = ['name']


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ['name', 'contact_person', 'phone', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'contact_person']
