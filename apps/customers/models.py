from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class BillingType(models.TextChoices):
    INDIVIDUAL = 'individual', 'Individual'
    COMPANY = 'company', 'Company'


class MealType(models.TextChoices):
    LUNCH = 'lunch', 'Lunch'
    DINNER = 'dinner', 'Dinner'


class Company(models.Model):
    """Employer that is billed on behalf of its customers."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    address = models.CharField(max_length=300)
    phone = models.CharField(max_length=15, blank=True)
    email = models.EmailField(blank=True)
    contact_person = models.CharField(max_length=100, blank=True)
    is_active = models.BooleanField(default=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'companies'
        verbose_name_plural = 'companies'
        indexes = [
            models.Index(fields=['is_active'], name='companies_active_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name


class Customer(models.Model):
    """
    Subscriber receiving daily meals.

    ``lunch_bag_format`` and ``dinner_bag_format`` hold the standing daily
    order in bag format (e.g. ``"5,5+7"``); blank means no meal.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    address = models.CharField(max_length=300)
    phone = models.CharField(max_length=15, blank=True)
    email = models.EmailField(blank=True)

    driver = models.ForeignKey(
        'drivers.Driver',
        on_delete=models.PROTECT,
        related_name='customers'
    )
    company = models.ForeignKey(
        Company,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='customers'
    )
    billing_type = models.CharField(
        max_length=20,
        choices=BillingType.choices,
        default=BillingType.INDIVIDUAL
    )

    # Standing daily food
    lunch_bag_format = models.CharField(max_length=100, blank=True)
    dinner_bag_format = models.CharField(max_length=100, blank=True)

    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    is_active = models.BooleanField(default=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        indexes = [
            models.Index(fields=['driver', 'is_active'], name='customers_driver_active_idx'),
            models.Index(fields=['company', 'is_active'], name='customers_company_active_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    def bag_format_for(self, meal_type):
        """Return the standing bag format for ``lunch`` or ``dinner``."""
        if meal_type == MealType.LUNCH:
            return self.lunch_bag_format
        if meal_type == MealType.DINNER:
            return self.dinner_bag_format
        raise ValueError(f"Unknown meal type: {meal_type}")

    @property
    def is_company_billed(self):
        return self.company_id is not None and self.billing_type == BillingType.COMPANY


class CustomerPackage(models.Model):
    """Food category a customer subscribes to, at a per-meal price."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(
        Customer,
        on_delete=models.CASCADE,
        related_name='packages'
    )
    category = models.ForeignKey(
        'catalog.FoodCategory',
        on_delete=models.PROTECT,
        related_name='customer_packages'
    )
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    class Meta:
        db_table = 'customer_packages'
        unique_together = [['customer', 'category']]
        ordering = ['category__name']

    def __str__(self):
        return f"{self.customer.name}: {self.category.name} @ {self.unit_price}"
