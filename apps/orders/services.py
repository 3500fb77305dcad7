"""
Daily Order Services Module
============================

Business logic for turning customers' standing bag formats into daily
delivery orders, and for correcting them afterwards.

Functions:
    generate_daily_orders: Create one DailyOrder per driver for a date.
    update_order_item: Change one item's bag format and recompute totals.
    update_order_status: Move a daily order to another status.
    get_daily_orders: Filtered daily order queryset.
    order_summary: Totals over an optional date range.

Example::

    from apps.orders.services import generate_daily_orders

    orders = generate_daily_orders(
        date=date(2025, 3, 3),
        nea_start_time=datetime(2025, 3, 3, 10, 0, tzinfo=timezone.utc),
    )
    for order in orders:
        print(order.driver.name, order.total_food)
"""

import logging
from collections import defaultdict
from datetime import date as date_type, datetime
from decimal import Decimal
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.db.models import Q, Sum, Count

from apps.customers.models import Customer, MealType
from .bag_format import parse_bag_format, calculate_nea_end_time
from .exceptions import (
    InvalidBagFormatError,
    DailyOrdersAlreadyExistError,
    DailyOrderNotFoundError,
    OrderItemNotFoundError,
)
from .models import DailyOrder, OrderItem

logger = logging.getLogger(__name__)


def _customers_due_on(day):
    return (
        Customer.objects
        .filter(is_active=True, start_date__lte=day)
        .filter(Q(end_date__isnull=True) | Q(end_date__gte=day))
        .select_related('driver')
        .prefetch_related('packages__category')
        .order_by('driver_id', 'name')
    )


@transaction.atomic
def generate_daily_orders(
    *,
    date: date_type,
    nea_start_time: datetime,
    duration_hours: int = None,
):
    """
    Generate the day's orders from every due customer's standing food.

    For each customer, each meal with a non-blank bag format, and each
    subscribed package, one OrderItem is created. Items are grouped into
    one DailyOrder per driver.

    Args:
        date: Delivery date.
        nea_start_time: Start of the delivery window.
        duration_hours: Window length. Defaults to
            ``settings.CATERING['NEA_DURATION_HOURS']``.

    Returns:
        list[DailyOrder]: The created orders (drivers without due customers
        get no order).

    Raises:
        DailyOrdersAlreadyExistError: If any order exists for the date.
    """
    if DailyOrder.objects.filter(date=date).exists():
        raise DailyOrdersAlreadyExistError("Daily orders already exist for this date")

    if duration_hours is None:
        duration_hours = settings.CATERING['NEA_DURATION_HOURS']
    nea_end_time = calculate_nea_end_time(nea_start_time, duration_hours)

    customers_by_driver = defaultdict(list)
    for customer in _customers_due_on(date):
        customers_by_driver[customer.driver].append(customer)

    created = []
    for driver, customers in customers_by_driver.items():
        items = []
        for customer in customers:
            for meal_type in MealType.values:
                bag_format = customer.bag_format_for(meal_type)
                if not bag_format:
                    continue
                try:
                    counts = parse_bag_format(bag_format)
                except InvalidBagFormatError as e:
                    logger.warning(
                        "Skipping %s %s for customer %s: %s",
                        meal_type, bag_format, customer.id, e
                    )
                    continue

                for package in customer.packages.all():
                    items.append(OrderItem(
                        customer=customer,
                        category=package.category,
                        meal_type=meal_type,
                        bag_format=bag_format,
                        non_veg_count=counts.non_veg_count,
                        veg_count=counts.veg_count,
                        total_count=counts.total_count,
                        unit_price=package.unit_price,
                        total_amount=package.unit_price * counts.total_count,
                    ))

        if not items:
            continue

        order = DailyOrder.objects.create(
            date=date,
            driver=driver,
            nea_start_time=nea_start_time,
            nea_end_time=nea_end_time,
        )
        for item in items:
            item.daily_order = order
        OrderItem.objects.bulk_create(items)
        order.recalculate_totals()
        created.append(order)

    logger.info("Generated %d daily order(s) for %s", len(created), date)
    return created


def get_daily_order(*, order_id: UUID) -> DailyOrder:
    try:
        return (
            DailyOrder.objects
            .select_related('driver')
            .prefetch_related('items__customer', 'items__category')
            .get(id=order_id)
        )
    except DailyOrder.DoesNotExist:
        raise DailyOrderNotFoundError("Daily order not found")


@transaction.atomic
def update_order_item(*, order_id: UUID, item_id: UUID, bag_format: str) -> DailyOrder:
    """
    Replace one item's bag format and recompute the item and order totals.

    Raises:
        DailyOrderNotFoundError: If the order doesn't exist.
        OrderItemNotFoundError: If the item isn't part of the order.
        InvalidBagFormatError: If the bag format doesn't parse.
    """
    try:
        order = DailyOrder.objects.select_for_update().get(id=order_id)
    except DailyOrder.DoesNotExist:
        raise DailyOrderNotFoundError("Daily order not found")

    try:
        item = order.items.get(id=item_id)
    except OrderItem.DoesNotExist:
        raise OrderItemNotFoundError("Order item not found")

    item.apply_bag_format(bag_format)
    item.save()
    order.recalculate_totals()

    return get_daily_order(order_id=order.id)


def update_order_status(*, order_id: UUID, status: str) -> DailyOrder:
    updated = DailyOrder.objects.filter(id=order_id).update(status=status)
    if not updated:
        raise DailyOrderNotFoundError("Daily order not found")
    return get_daily_order(order_id=order_id)


def get_daily_orders(*, date=None, driver_id=None):
    queryset = (
        DailyOrder.objects
        .select_related('driver')
        .prefetch_related('items__customer', 'items__category')
        .order_by('-date', 'driver__name')
    )
    if date:
        queryset = queryset.filter(date=date)
    if driver_id:
        queryset = queryset.filter(driver_id=driver_id)
    return queryset


def order_summary(*, start_date=None, end_date=None) -> dict:
    """
    Totals over daily orders, optionally limited to a date range.

    Returns zeros when nothing matches.
    """
    queryset = DailyOrder.objects.all()
    if start_date:
        queryset = queryset.filter(date__gte=start_date)
    if end_date:
        queryset = queryset.filter(date__lte=end_date)

    totals = queryset.aggregate(
        total_orders=Count('id'),
        total_veg_food=Sum('total_veg_food'),
        total_non_veg_food=Sum('total_non_veg_food'),
        total_food=Sum('total_food'),
        total_revenue=Sum('total_amount'),
    )

    return {
        'total_orders': totals['total_orders'],
        'total_veg_food': totals['total_veg_food'] or 0,
        'total_non_veg_food': totals['total_non_veg_food'] or 0,
        'total_food': totals['total_food'] or 0,
        'total_revenue': totals['total_revenue'] or Decimal('0.00'),
        'start_date': start_date,
        'end_date': end_date,
    }
