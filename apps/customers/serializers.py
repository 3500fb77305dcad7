"""
Serializers for customers app.

Input Serializers:
    DailyFoodInputSerializer - Standing lunch/dinner patch for one customer
    BulkDailyFoodInputSerializer - Standing food changes for many customers

Model Serializers:
    CompanySerializer
    CustomerPackageSerializer
    CustomerSerializer
"""

from decimal import Decimal
from rest_framework import serializers
from apps.catalog.models import FoodCategory
from apps.drivers.models import Driver
from apps.drivers.serializers import DriverMinimalSerializer
from apps.orders.bag_format import validate_bag_format
from .models import Company, Customer, CustomerPackage, MealType, BillingType
from .services import ensure_unique_company_name
from .exceptions import DuplicateCompanyError


def validate_standing_bag_format(value):
    """Blank means 'no meal'; anything else must parse."""
    value = (value or '').strip()
    if not value:
        return ''
    result = validate_bag_format(value, require_items=False)
    if not result.is_valid:
        raise serializers.ValidationError(result.error)
    return value


# =============================================================================
# Input Serializers
# =============================================================================

class DailyFoodInputSerializer(serializers.Serializer):
    """
    Validate a standing daily food patch.

    Fields:
        lunch (str): Optional lunch bag format
        dinner (str): Optional dinner bag format
    """

    lunch = serializers.CharField(required=False, allow_blank=True, max_length=100)
    dinner = serializers.CharField(required=False, allow_blank=True, max_length=100)

    def validate_lunch(self, value):
        return validate_standing_bag_format(value)

    def validate_dinner(self, value):
        return validate_standing_bag_format(value)


class DailyFoodUpdateSerializer(serializers.Serializer):
    customer = serializers.UUIDField()
    meal_type = serializers.ChoiceField(choices=MealType.choices)
    bag_format = serializers.CharField(allow_blank=True, max_length=100)

    def validate_bag_format(self, value):
        return validate_standing_bag_format(value)


class BulkDailyFoodInputSerializer(serializers.Serializer):
    """Validate a bulk standing food update (``updates`` list, at least one)."""

    updates = DailyFoodUpdateSerializer(many=True, allow_empty=False)


# =============================================================================
# Model Serializers
# =============================================================================

class CompanySerializer(serializers.ModelSerializer):
    """Serializer for companies with case-insensitive name uniqueness."""

    name = serializers.CharField(max_length=100)

    class Meta:
        model = Company
        fields = [
            'id',
            'name',
            'address',
            'phone',
            'email',
            'contact_person',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        try:
            ensure_unique_company_name(
                name=value,
                exclude_id=self.instance.id if self.instance else None,
            )
        except DuplicateCompanyError as e:
            raise serializers.ValidationError(str(e))
        return value


class CompanyMinimalSerializer(serializers.ModelSerializer):
    class Meta:
        model = Company
        fields = ['id', 'name']
        read_only_fields = fields


class CustomerPackageSerializer(serializers.ModelSerializer):
    """A subscribed category with its per-meal price."""

    category = serializers.PrimaryKeyRelatedField(
        queryset=FoodCategory.objects.filter(is_active=True)
    )
    category_name = serializers.CharField(source='category.name', read_only=True)

    class Meta:
        model = CustomerPackage
        fields = ['id', 'category', 'category_name', 'unit_price']
        read_only_fields = ['id', 'category_name']
        # Keeps price times MAX_MEALS within an order item's amount column
        extra_kwargs = {'unit_price': {'max_value': Decimal('99999.99')}}


class CustomerSerializer(serializers.ModelSerializer):
    """
    Main serializer for customers.

    Accepts ``driver`` and ``company`` as ids and ``packages`` as a nested
    list; returns the driver and company in minimal nested form.
    """

    driver = serializers.PrimaryKeyRelatedField(
        queryset=Driver.objects.filter(is_active=True)
    )
    company = serializers.PrimaryKeyRelatedField(
        queryset=Company.objects.filter(is_active=True),
        required=False,
        allow_null=True,
    )
    driver_detail = DriverMinimalSerializer(source='driver', read_only=True)
    company_detail = CompanyMinimalSerializer(source='company', read_only=True)
    packages = CustomerPackageSerializer(many=True)

    class Meta:
        model = Customer
        fields = [
            'id',
            'name',
            'address',
            'phone',
            'email',
            'driver',
            'driver_detail',
            'company',
            'company_detail',
            'billing_type',
            'packages',
            'lunch_bag_format',
            'dinner_bag_format',
            'start_date',
            'end_date',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_lunch_bag_format(self, value):
        return validate_standing_bag_format(value)

    def validate_dinner_bag_format(self, value):
        return validate_standing_bag_format(value)

    def validate_packages(self, value):
        if not value:
            raise serializers.ValidationError('At least one package is required')
        category_ids = [package['category'].id for package in value]
        if len(category_ids) != len(set(category_ids)):
            raise serializers.ValidationError('Each category may only be subscribed once')
        return value

    def validate(self, attrs):
        start_date = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end_date = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({
                'end_date': 'End date must be after start date'
            })

        billing_type = attrs.get('billing_type', getattr(self.instance, 'billing_type', None))
        company = attrs.get('company', getattr(self.instance, 'company', None))
        if billing_type == BillingType.COMPANY and company is None:
            raise serializers.ValidationError({
                'company': 'Company billing requires a company'
            })

        return attrs
