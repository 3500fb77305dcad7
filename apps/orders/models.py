from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid

from apps.customers.models import MealType
from .bag_format import parse_bag_format


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    IN_PROGRESS = 'in_progress', 'In Progress'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'


class DailyOrder(models.Model):
    """
    One driver's deliveries for one day.

    The food and amount totals are always the sums of the items; call
    :meth:`recalculate_totals` after changing items.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateField()
    driver = models.ForeignKey(
        'drivers.Driver',
        on_delete=models.PROTECT,
        related_name='daily_orders'
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING
    )

    # Delivery window
    nea_start_time = models.DateTimeField(null=True, blank=True)
    nea_end_time = models.DateTimeField(null=True, blank=True)

    # Totals (derived from items)
    total_veg_food = models.PositiveIntegerField(default=0)
    total_non_veg_food = models.PositiveIntegerField(default=0)
    total_food = models.PositiveIntegerField(default=0)
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'daily_orders'
        unique_together = [['date', 'driver']]
        indexes = [
            models.Index(fields=['date', 'driver'], name='daily_orders_date_driver_idx'),
            models.Index(fields=['status'], name='daily_orders_status_idx'),
        ]
        ordering = ['-date', 'driver__name']

    def __str__(self):
        return f"{self.date} - {self.driver.name} ({self.total_food} meals)"

    def recalculate_totals(self, save=True):
        """Set the order totals to the sums of its items."""
        veg = non_veg = 0
        amount = Decimal('0.00')
        for item in self.items.all():
            veg += item.veg_count
            non_veg += item.non_veg_count
            amount += item.total_amount

        self.total_veg_food = veg
        self.total_non_veg_food = non_veg
        self.total_food = veg + non_veg
        self.total_amount = amount

        if save:
            self.save(update_fields=[
                'total_veg_food',
                'total_non_veg_food',
                'total_food',
                'total_amount',
                'updated_at',
            ])


class OrderItem(models.Model):
    """A customer's meals of one category for one meal of the day."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    daily_order = models.ForeignKey(
        DailyOrder,
        on_delete=models.CASCADE,
        related_name='items'
    )
    customer = models.ForeignKey(
        'customers.Customer',
        on_delete=models.PROTECT,
        related_name='order_items'
    )
    category = models.ForeignKey(
        'catalog.FoodCategory',
        on_delete=models.PROTECT,
        related_name='order_items'
    )
    meal_type = models.CharField(max_length=10, choices=MealType.choices)

    bag_format = models.CharField(max_length=100)
    non_veg_count = models.PositiveIntegerField(default=0)
    veg_count = models.PositiveIntegerField(default=0)
    total_count = models.PositiveIntegerField(default=0)

    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )

    class Meta:
        db_table = 'order_items'
        indexes = [
            models.Index(fields=['customer', 'category'], name='order_items_cust_cat_idx'),
        ]
        ordering = ['customer__name', 'meal_type', 'category__name']

    def __str__(self):
        return f"{self.customer.name} {self.meal_type}: {self.bag_format}"

    def apply_bag_format(self, bag_format):
        """
        Set the bag format and the counts and amount derived from it.

        Raises:
            InvalidBagFormatError: If the format doesn't parse.
        """
        counts = parse_bag_format(bag_format)
        self.bag_format = bag_format.strip()
        self.non_veg_count = counts.non_veg_count
        self.veg_count = counts.veg_count
        self.total_count = counts.total_count
        self.total_amount = self.unit_price * counts.total_count
