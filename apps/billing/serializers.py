"""
Serializers for billing app.

Input Serializers:
    GenerateBillsInputSerializer - Year and month
    GenerateEntityBillInputSerializer - Entity plus year and month
    BillQuerySerializer - Bill list filters
    EntityQuerySerializer - Entity filter for payments and the ledger
    RecordPaymentInputSerializer - A payment to record

Output Serializers:
    BillSerializer, BillItemSerializer
    PaymentSerializer, PaymentAllocationSerializer
    LedgerEntrySerializer
"""

from decimal import Decimal
from rest_framework import serializers
from .models import (
    Bill,
    BillItem,
    BillStatus,
    EntityType,
    Payment,
    PaymentAllocation,
    PaymentMethod,
)


# =============================================================================
# Input Serializers
# =============================================================================

class GenerateBillsInputSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    month = serializers.IntegerField(min_value=1, max_value=12)


class GenerateEntityBillInputSerializer(GenerateBillsInputSerializer):
    entity_type = serializers.ChoiceField(choices=EntityType.choices)
    entity_id = serializers.UUIDField()


class BillQuerySerializer(serializers.Serializer):
    """Optional filters for the bill list."""

    entity_type = serializers.ChoiceField(choices=EntityType.choices, required=False)
    entity_id = serializers.UUIDField(required=False)
    year = serializers.IntegerField(min_value=2000, max_value=2100, required=False)
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)
    status = serializers.ChoiceField(choices=BillStatus.choices, required=False)


class EntityQuerySerializer(serializers.Serializer):
    entity_type = serializers.ChoiceField(choices=EntityType.choices, required=False)
    entity_id = serializers.UUIDField(required=False)


class LedgerQuerySerializer(serializers.Serializer):
    """The ledger needs both the entity type and id."""

    entity_type = serializers.ChoiceField(choices=EntityType.choices)
    entity_id = serializers.UUIDField()


class RecordPaymentInputSerializer(serializers.Serializer):
    """
    Validate a payment.

    Fields:
        entity_type (str): 'customer' or 'company'
        entity_id (UUID): Payer
        amount (Decimal): At least 0.01
        date (date): Payment date
        method (str): cash, bank, upi, card or other (default cash)
        reference (str): Optional reference; 'ADVANCE' when nothing is allocated
        notes (str): Optional notes
        bill_id (UUID): Optional bill to pay; otherwise oldest open bills first
    """

    entity_type = serializers.ChoiceField(choices=EntityType.choices)
    entity_id = serializers.UUIDField()
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    date = serializers.DateField()
    method = serializers.ChoiceField(
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH
    )
    reference = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    bill_id = serializers.UUIDField(required=False, allow_null=True, default=None)


# =============================================================================
# Output Serializers
# =============================================================================

class BillItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = BillItem
        fields = ['id', 'category', 'category_name', 'unit_price', 'quantity', 'amount']
        read_only_fields = fields


class BillSerializer(serializers.ModelSerializer):
    """
    Bill with its items.

    ``entity_name`` is looked up in the ``entity_names`` context map
    (id -> name) when the view provides one.
    """

    items = BillItemSerializer(many=True, read_only=True)
    entity_name = serializers.SerializerMethodField()

    class Meta:
        model = Bill
        fields = [
            'id',
            'number',
            'entity_type',
            'entity_id',
            'entity_name',
            'period_year',
            'period_month',
            'start_date',
            'end_date',
            'items',
            'subtotal',
            'tax',
            'total_amount',
            'paid_amount',
            'balance_amount',
            'status',
            'due_date',
            'generated_at',
            'managed_by',
            'parent_bill',
            'is_consolidated',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_entity_name(self, obj) -> str:
        return self.context.get('entity_names', {}).get(obj.entity_id)


class PaymentAllocationSerializer(serializers.ModelSerializer):
    bill_number = serializers.CharField(source='bill.number', read_only=True)

    class Meta:
        model = PaymentAllocation
        fields = [
            'id',
            'bill',
            'bill_number',
            'amount',
            'previous_balance',
            'new_balance',
            'bill_status',
            'created_at',
        ]
        read_only_fields = fields


class PaymentSerializer(serializers.ModelSerializer):
    allocations = PaymentAllocationSerializer(many=True, read_only=True)
    entity_name = serializers.SerializerMethodField()
    unallocated_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        read_only=True
    )

    class Meta:
        model = Payment
        fields = [
            'id',
            'entity_type',
            'entity_id',
            'entity_name',
            'date',
            'amount',
            'method',
            'reference',
            'notes',
            'allocations',
            'unallocated_amount',
            'created_at',
        ]
        read_only_fields = fields

    def get_entity_name(self, obj) -> str:
        return self.context.get('entity_names', {}).get(obj.entity_id)


class LedgerEntrySerializer(serializers.Serializer):
    type = serializers.CharField()
    date = serializers.DateField()
    reference = serializers.CharField()
    debit = serializers.DecimalField(max_digits=14, decimal_places=2)
    credit = serializers.DecimalField(max_digits=14, decimal_places=2)
    balance = serializers.DecimalField(max_digits=14, decimal_places=2)
