"""
Customer Services Module
=========================

Business logic for customers, their subscribed packages and their standing
daily food, and for companies.

Functions:
    create_customer: Create a customer with packages.
    update_customer: Update a customer, replacing packages when given.
    update_daily_food: Change one customer's standing lunch/dinner.
    bulk_update_daily_food: Change standing food for many customers at once.
    ensure_unique_company_name: Case-insensitive company name check.
    delete_company: Delete a company that has no customers.

Example::

    from apps.customers.services import create_customer

    customer = create_customer(
        name='Asha Patel',
        address='12 Park Street',
        driver=driver,
        start_date=date(2025, 1, 1),
        lunch_bag_format='5,5+7',
        packages=[{'category': thali, 'unit_price': Decimal('60.00')}],
    )
"""

import logging
from uuid import UUID

from django.db import transaction

from .exceptions import (
    CustomerNotFoundError,
    CompanyNotFoundError,
    DuplicateCompanyError,
    CompanyHasCustomersError,
)
from .models import Company, Customer, CustomerPackage, MealType

logger = logging.getLogger(__name__)

MEAL_FIELDS = {
    MealType.LUNCH: 'lunch_bag_format',
    MealType.DINNER: 'dinner_bag_format',
}


def _replace_packages(customer, packages):
    customer.packages.all().delete()
    CustomerPackage.objects.bulk_create([
        CustomerPackage(
            customer=customer,
            category=package['category'],
            unit_price=package['unit_price'],
        )
        for package in packages
    ])


@transaction.atomic
def create_customer(*, packages, **fields) -> Customer:
    """
    Create a customer and their package subscriptions.

    Args:
        packages: List of ``{'category': FoodCategory, 'unit_price': Decimal}``.
        **fields: Customer model fields.

    Returns:
        The created Customer.
    """
    customer = Customer.objects.create(**fields)
    _replace_packages(customer, packages)
    return customer


@transaction.atomic
def update_customer(*, customer: Customer, packages=None, **fields) -> Customer:
    """
    Update customer fields; replace packages only when ``packages`` is given.
    """
    for name, value in fields.items():
        setattr(customer, name, value)
    customer.save()

    if packages is not None:
        _replace_packages(customer, packages)

    return customer


def get_customer_by_id(*, customer_id: UUID) -> Customer:
    try:
        return (
            Customer.objects
            .select_related('driver', 'company')
            .prefetch_related('packages__category')
            .get(id=customer_id)
        )
    except Customer.DoesNotExist:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")


def update_daily_food(*, customer_id: UUID, lunch=None, dinner=None) -> Customer:
    """
    Update one customer's standing lunch and/or dinner bag format.

    Values are expected to be validated already; ``None`` leaves the meal
    unchanged.

    Raises:
        CustomerNotFoundError: If the customer doesn't exist.
    """
    customer = get_customer_by_id(customer_id=customer_id)

    update_fields = []
    if lunch is not None:
        customer.lunch_bag_format = lunch
        update_fields.append('lunch_bag_format')
    if dinner is not None:
        customer.dinner_bag_format = dinner
        update_fields.append('dinner_bag_format')

    if update_fields:
        customer.save(update_fields=update_fields + ['updated_at'])

    return customer


@transaction.atomic
def bulk_update_daily_food(*, updates) -> int:
    """
    Apply many standing food changes atomically.

    Args:
        updates: List of ``{'customer': UUID, 'meal_type': str,
            'bag_format': str}`` dicts.

    Returns:
        int: Number of customers modified.

    Raises:
        CustomerNotFoundError: If any customer doesn't exist (nothing is
            saved in that case).
    """
    customer_ids = {update['customer'] for update in updates}
    customers = Customer.objects.in_bulk(list(customer_ids))

    missing = customer_ids - set(customers)
    if missing:
        raise CustomerNotFoundError(
            f"Customer {sorted(str(m) for m in missing)[0]} not found"
        )

    for update in updates:
        customer = customers[update['customer']]
        setattr(customer, MEAL_FIELDS[update['meal_type']], update['bag_format'])

    for customer in customers.values():
        customer.save(update_fields=['lunch_bag_format', 'dinner_bag_format', 'updated_at'])

    logger.info("Bulk daily food update: %d change(s) for %d customer(s)",
                len(updates), len(customers))
    return len(customers)


def ensure_unique_company_name(*, name: str, exclude_id=None) -> None:
    """
    Raises:
        DuplicateCompanyError: If another company has the same name,
            ignoring case.
    """
    queryset = Company.objects.filter(name__iexact=name.strip())
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateCompanyError("Company with this name already exists")


def delete_company(*, company_id: UUID) -> None:
    """
    Delete a company.

    Raises:
        CompanyNotFoundError: If the company doesn't exist.
        CompanyHasCustomersError: If any customer (active or not) still
            references the company.
    """
    try:
        company = Company.objects.get(id=company_id)
    except Company.DoesNotExist:
        raise CompanyNotFoundError("Company not found")

    customer_count = company.customers.count()
    if customer_count > 0:
        raise CompanyHasCustomersError(
            f"Cannot delete company. It has {customer_count} associated customers. "
            "Please reassign or delete customers first."
        )

    company.delete()
