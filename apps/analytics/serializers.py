"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    DateQuerySerializer - Single ``date`` parameter
    DateRangeQuerySerializer - Required ``start_date``/``end_date``
    CustomerMonthlyQuerySerializer - Date range plus ``tax_rate``
    ProfitQuerySerializer - Date range plus ``cost_per_meal``
    BagFormatInputSerializer - Bag format to validate

Response Serializers:
    DailyTotalsSerializer - Daily totals with driver breakdown
    RangeTotalsSerializer - Range summary with driver summary
    CustomerMonthlySerializer - Itemized customer calculation
    ProfitAnalysisSerializer - Profit estimate
    BagFormatResultSerializer - Parsed bag format counts
    ErrorSerializer - Error envelope
"""

from decimal import Decimal
from django.conf import settings
from rest_framework import serializers


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class DateQuerySerializer(serializers.Serializer):
    """
    Validate the daily analytics query.

    Used by: daily_totals

    Query Parameters:
        date (date): Delivery date (YYYY-MM-DD)
    """

    date = serializers.DateField(help_text='Delivery date (YYYY-MM-DD)')


class DateRangeQuerySerializer(serializers.Serializer):
    """
    Validate an inclusive date range.

    Used by: range_totals, and as the base of the customer monthly and
    profit queries.

    Query Parameters:
        start_date (date): First day of the range
        end_date (date): Last day of the range
    """

    start_date = serializers.DateField(help_text='Start date (YYYY-MM-DD)')
    end_date = serializers.DateField(help_text='End date (YYYY-MM-DD)')

    def validate(self, attrs):
        if attrs['start_date'] > attrs['end_date']:
            raise serializers.ValidationError({
                'start_date': 'Start date must be on or before end date'
            })
        return attrs


class CustomerMonthlyQuerySerializer(DateRangeQuerySerializer):
    """Date range plus an optional tax rate between 0 and 1."""

    tax_rate = serializers.DecimalField(
        max_digits=5,
        decimal_places=4,
        min_value=Decimal('0'),
        max_value=Decimal('1'),
        required=False,
        help_text='Tax rate as a fraction (default 0.18)'
    )

    def validate(self, attrs):
        attrs = super().validate(attrs)
        attrs.setdefault('tax_rate', settings.CATERING['DEFAULT_TAX_RATE'])
        return attrs


class ProfitQuerySerializer(DateRangeQuerySerializer):
    """Date range plus an optional cost per meal between 0 and 100000."""

    cost_per_meal = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100000'),
        required=False,
        help_text='Estimated cost of one meal (default 25)'
    )

    def validate(self, attrs):
        attrs = super().validate(attrs)
        attrs.setdefault('cost_per_meal', settings.CATERING['DEFAULT_COST_PER_MEAL'])
        return attrs


class BagFormatInputSerializer(serializers.Serializer):
    bag_format = serializers.CharField(
        max_length=100,
        allow_blank=True,
        trim_whitespace=False,
        help_text='Bag format such as "5,5+7"'
    )


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class DriverBreakdownSerializer(serializers.Serializer):
    """Nested serializer for one driver's day."""
    driver_id = serializers.UUIDField()
    driver_name = serializers.CharField()
    route = serializers.CharField()
    veg_count = serializers.IntegerField()
    non_veg_count = serializers.IntegerField()
    total_count = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class DailyTotalsSerializer(serializers.Serializer):
    """Response serializer for daily totals."""
    date = serializers.DateField()
    total_veg_food = serializers.IntegerField()
    total_non_veg_food = serializers.IntegerField()
    total_food = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=16, decimal_places=2)
    driver_breakdown = DriverBreakdownSerializer(many=True)


class RangeSummarySerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    total_veg_food = serializers.IntegerField()
    total_non_veg_food = serializers.IntegerField()
    total_food = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=16, decimal_places=2)
    average_order_value = serializers.DecimalField(max_digits=14, decimal_places=2)


class DriverSummarySerializer(serializers.Serializer):
    driver_id = serializers.UUIDField()
    driver_name = serializers.CharField()
    route = serializers.CharField()
    total_orders = serializers.IntegerField()
    total_veg_food = serializers.IntegerField()
    total_non_veg_food = serializers.IntegerField()
    total_food = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=16, decimal_places=2)


class RangeTotalsSerializer(serializers.Serializer):
    """Response serializer for date-range totals."""
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    summary = RangeSummarySerializer()
    driver_summary = DriverSummarySerializer(many=True)


class PackageBreakdownSerializer(serializers.Serializer):
    """Nested serializer for one category line of a monthly calculation."""
    category_id = serializers.UUIDField()
    category_name = serializers.CharField()
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    total_quantity = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class CustomerMonthlySerializer(serializers.Serializer):
    """Response serializer for a customer's monthly calculation."""
    customer_id = serializers.UUIDField()
    customer_name = serializers.CharField()
    driver_id = serializers.UUIDField()
    driver_name = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    total_days = serializers.IntegerField()
    package_breakdown = PackageBreakdownSerializer(many=True)
    total_veg_food = serializers.IntegerField()
    total_non_veg_food = serializers.IntegerField()
    total_food = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2)
    tax_rate = serializers.DecimalField(max_digits=5, decimal_places=4)
    tax = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class ProfitAnalysisSerializer(serializers.Serializer):
    """Response serializer for profit analysis."""
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    total_revenue = serializers.DecimalField(max_digits=16, decimal_places=2)
    total_food = serializers.IntegerField()
    estimated_cost_per_meal = serializers.DecimalField(max_digits=10, decimal_places=2)
    # No digit limit; the margin has no bound when revenue is tiny
    total_cost = serializers.DecimalField(max_digits=None, decimal_places=2)
    gross_profit = serializers.DecimalField(max_digits=None, decimal_places=2)
    profit_margin = serializers.DecimalField(max_digits=None, decimal_places=2)


class BagFormatResultSerializer(serializers.Serializer):
    """Response serializer for a valid bag format."""
    bag_format = serializers.CharField()
    non_veg_count = serializers.IntegerField()
    veg_count = serializers.IntegerField()
    total_count = serializers.IntegerField()


class ErrorSerializer(serializers.Serializer):
    """Standard error envelope."""
    success = serializers.BooleanField(default=False)
    message = serializers.CharField()
