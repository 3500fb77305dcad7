"""
Serializers for orders app.

Input Serializers:
    DailyOrderQuerySerializer - List filters (date, driver)
    OrderSummaryQuerySerializer - Optional date range for the summary
    GenerateOrdersInputSerializer - Date and NEA window for generation
    OrderItemUpdateSerializer - New bag format for one item
    OrderStatusUpdateSerializer - New status for one order

Output Serializers:
    OrderItemSerializer
    DailyOrderSerializer
    OrderSummarySerializer
"""

from rest_framework import serializers
from apps.drivers.serializers import DriverMinimalSerializer
from .bag_format import validate_bag_format
from .models import DailyOrder, OrderItem, OrderStatus


# =============================================================================
# Input Serializers
# =============================================================================

class DailyOrderQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    driver = serializers.UUIDField(required=False)


class OrderSummaryQuerySerializer(serializers.Serializer):
    """Optional inclusive date range; start must not be after end."""

    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        start_date = attrs.get('start_date')
        end_date = attrs.get('end_date')
        if start_date and end_date and start_date > end_date:
            raise serializers.ValidationError({
                'end_date': 'End date must be on or after start date'
            })
        return attrs


class GenerateOrdersInputSerializer(serializers.Serializer):
    """
    Validate an order generation request.

    Fields:
        date (date): Delivery date
        nea_start_time (datetime): Start of the delivery window
        duration_hours (int): Optional window length, 1-24
    """

    date = serializers.DateField()
    nea_start_time = serializers.DateTimeField()
    duration_hours = serializers.IntegerField(
        required=False,
        min_value=1,
        max_value=24
    )


class OrderItemUpdateSerializer(serializers.Serializer):
    bag_format = serializers.CharField(max_length=100)

    def validate_bag_format(self, value):
        result = validate_bag_format(value, require_items=False)
        if not result.is_valid:
            raise serializers.ValidationError(result.error)
        return value.strip()


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices)


# =============================================================================
# Output Serializers
# =============================================================================

class OrderItemSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source='customer.name', read_only=True)
    category_name = serializers.CharField(source='category.name', read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id',
            'customer',
            'customer_name',
            'category',
            'category_name',
            'meal_type',
            'bag_format',
            'non_veg_count',
            'veg_count',
            'total_count',
            'unit_price',
            'total_amount',
        ]
        read_only_fields = fields


class DailyOrderSerializer(serializers.ModelSerializer):
    """A driver's daily order with its items."""

    driver = DriverMinimalSerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = DailyOrder
        fields = [
            'id',
            'date',
            'driver',
            'status',
            'nea_start_time',
            'nea_end_time',
            'total_veg_food',
            'total_non_veg_food',
            'total_food',
            'total_amount',
            'items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class OrderSummarySerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    total_veg_food = serializers.IntegerField()
    total_non_veg_food = serializers.IntegerField()
    total_food = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
