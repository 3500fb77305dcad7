from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import uuid


class EntityType(models.TextChoices):
    CUSTOMER = 'customer', 'Customer'
    COMPANY = 'company', 'Company'


class BillStatus(models.TextChoices):
    UNPAID = 'unpaid', 'Unpaid'
    PARTIAL = 'partial', 'Partial'
    PAID = 'paid', 'Paid'
    CANCELLED = 'cancelled', 'Cancelled'


class ManagedBy(models.TextChoices):
    SELF = 'self', 'Self'
    COMPANY = 'company', 'Company'


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    BANK = 'bank', 'Bank Transfer'
    UPI = 'upi', 'UPI'
    CARD = 'card', 'Card'
    OTHER = 'other', 'Other'


class Bill(models.Model):
    """
    Monthly bill for a customer or a company.

    Company bills are consolidated: they carry no items, their subtotal is
    the sum of their customers' bills for the period, and those customer
    bills point at them through ``parent_bill``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    number = models.CharField(max_length=30, unique=True)

    # Billed entity (customer or company id)
    entity_type = models.CharField(max_length=10, choices=EntityType.choices)
    entity_id = models.UUIDField()

    # Period
    period_year = models.PositiveIntegerField()
    period_month = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    start_date = models.DateField()
    end_date = models.DateField()

    # Amounts
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    tax = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    paid_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    balance_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(
        max_length=20,
        choices=BillStatus.choices,
        default=BillStatus.UNPAID
    )
    due_date = models.DateField(null=True, blank=True)
    generated_at = models.DateTimeField()

    # Company billing
    managed_by = models.CharField(
        max_length=10,
        choices=ManagedBy.choices,
        default=ManagedBy.SELF
    )
    parent_bill = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='linked_bills'
    )
    is_consolidated = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bills'
        unique_together = [['entity_type', 'entity_id', 'period_year', 'period_month']]
        indexes = [
            models.Index(fields=['entity_type', 'entity_id'], name='bills_entity_idx'),
            models.Index(fields=['period_year', 'period_month'], name='bills_period_idx'),
            models.Index(fields=['status'], name='bills_status_idx'),
        ]
        ordering = ['-period_year', '-period_month', '-created_at']

    def __str__(self):
        return f"{self.number} ({self.entity_type}) {self.total_amount}"

    def refresh_balance(self):
        """Derive total, balance and status from subtotal, tax and paid amount."""
        self.total_amount = self.subtotal + self.tax
        self.balance_amount = max(Decimal('0.00'), self.total_amount - self.paid_amount)
        if self.balance_amount == 0:
            self.status = BillStatus.PAID
        elif self.paid_amount > 0:
            self.status = BillStatus.PARTIAL
        else:
            self.status = BillStatus.UNPAID

    def apply_payment(self, amount):
        """Add ``amount`` to the paid amount and refresh the balance."""
        self.paid_amount += amount
        self.refresh_balance()


class BillItem(models.Model):
    """One category line of a customer bill."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    bill = models.ForeignKey(
        Bill,
        on_delete=models.CASCADE,
        related_name='items'
    )
    category = models.ForeignKey(
        'catalog.FoodCategory',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='bill_items'
    )
    category_name = models.CharField(max_length=50)
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    quantity = models.PositiveIntegerField(default=0)
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    class Meta:
        db_table = 'bill_items'
        ordering = ['category_name']

    def __str__(self):
        return f"{self.category_name}: {self.quantity} x {self.unit_price}"


class Payment(models.Model):
    """
    Money received from a customer or a company.

    How the amount was applied is recorded in ``allocations``; whatever
    is not allocated is an advance for later bills.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    entity_type = models.CharField(max_length=10, choices=EntityType.choices)
    entity_id = models.UUIDField()
    date = models.DateField()
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    method = models.CharField(
        max_length=10,
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH
    )
    reference = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        indexes = [
            models.Index(fields=['entity_type', 'entity_id', 'date'], name='payments_entity_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.entity_type} payment {self.amount} on {self.date}"

    @property
    def allocated_amount(self):
        return sum(
            (allocation.amount for allocation in self.allocations.all()),
            Decimal('0.00')
        )

    @property
    def unallocated_amount(self):
        return max(Decimal('0.00'), self.amount - self.allocated_amount)


class PaymentAllocation(models.Model):
    """Part of a payment applied to one bill, with the bill balance before and after."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    payment = models.ForeignKey(
        Payment,
        on_delete=models.CASCADE,
        related_name='allocations'
    )
    bill = models.ForeignKey(
        Bill,
        on_delete=models.CASCADE,
        related_name='allocations'
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    previous_balance = models.DecimalField(max_digits=12, decimal_places=2)
    new_balance = models.DecimalField(max_digits=12, decimal_places=2)
    bill_status = models.CharField(max_length=20, choices=BillStatus.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'payment_allocations'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.amount} -> {self.bill.number}"
