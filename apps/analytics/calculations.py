"""
Calculation Engine
===================

Aggregates daily orders into the numbers dispatch and accounts work from:
daily and date-range totals, per-customer monthly bills, and profit
estimates.

Classes:
    CalculationEngine: Static methods for order aggregation.

Key Features:
    - Daily totals with per-driver breakdown
    - Date-range totals with per-driver revenue ranking
    - Itemized customer monthly calculation with tax
    - Profit analysis using an estimated cost per meal
    - Working day counting (Monday to Friday)

Example:
    Monthly bill for one customer::

        from apps.analytics.calculations import CalculationEngine

        calc = CalculationEngine.customer_monthly(
            customer_id=customer.id,
            start_date=date(2025, 3, 1),
            end_date=date(2025, 3, 31),
        )
        if calc is None:
            print("No deliveries in March")
        else:
            print(f"Total due: {calc['total_amount']}")

Note:
    This module is read-only. Every aggregate method returns ``None`` when
    no orders match, and a plain dictionary otherwise, so results can be
    passed straight to a DRF ``Response``.
"""

from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.db.models import Sum, Count

from apps.customers.exceptions import CustomerNotFoundError
from apps.customers.models import Customer
from apps.orders.bag_format import validate_bag_format
from apps.orders.models import DailyOrder, OrderItem

CENT = Decimal('0.01')


def _money(value) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


class CalculationEngine:
    """
    Aggregation queries over daily orders.

    Methods:
        daily_totals: Totals for one day with per-driver breakdown.
        range_totals: Totals for an inclusive date range.
        customer_monthly: Itemized calculation for one customer.
        profit_analysis: Revenue against estimated meal cost.
        working_days: Weekdays in an inclusive date range.
        validate_and_parse_bag_format: Bag format check for the API.

    Note:
        Order totals are always the sums of their items, so summing orders
        and summing items give the same figures.
    """

    @staticmethod
    def working_days(start_date, end_date) -> int:
        """
        Count Monday-Friday days between two dates, both inclusive.

        Returns 0 when ``start_date`` is after ``end_date``.
        """
        count = 0
        current = start_date
        while current <= end_date:
            if current.weekday() < 5:
                count += 1
            current += timedelta(days=1)
        return count

    @staticmethod
    def daily_totals(day):
        """
        Totals for all daily orders on one date.

        Args:
            day (date): The delivery date.

        Returns:
            dict | None: ``None`` if no orders exist for the date, otherwise:
                - date (date)
                - total_veg_food, total_non_veg_food, total_food (int)
                - total_amount (Decimal)
                - driver_breakdown (list): One entry per driver with
                  driver_id, driver_name, route, veg_count, non_veg_count,
                  total_count and total_amount.
        """
        orders = list(
            DailyOrder.objects
            .filter(date=day)
            .select_related('driver')
            .order_by('driver__name')
        )
        if not orders:
            return None

        total_veg_food = 0
        total_non_veg_food = 0
        total_amount = Decimal('0.00')
        driver_breakdown = []

        for order in orders:
            total_veg_food += order.total_veg_food
            total_non_veg_food += order.total_non_veg_food
            total_amount += order.total_amount
            driver_breakdown.append({
                'driver_id': order.driver_id,
                'driver_name': order.driver.name,
                'route': order.driver.route,
                'veg_count': order.total_veg_food,
                'non_veg_count': order.total_non_veg_food,
                'total_count': order.total_food,
                'total_amount': order.total_amount,
            })

        return {
            'date': day,
            'total_veg_food': total_veg_food,
            'total_non_veg_food': total_non_veg_food,
            'total_food': total_veg_food + total_non_veg_food,
            'total_amount': total_amount,
            'driver_breakdown': driver_breakdown,
        }

    @staticmethod
    def range_totals(start_date, end_date):
        """
        Totals for all daily orders in an inclusive date range.

        Args:
            start_date (date): First day of the range.
            end_date (date): Last day of the range.

        Returns:
            dict | None: ``None`` if the range has no orders, otherwise:
                - start_date, end_date (date)
                - summary (dict): total_orders, total_veg_food,
                  total_non_veg_food, total_food, total_revenue,
                  average_order_value.
                - driver_summary (list): Per-driver totals (driver_id,
                  driver_name, route, total_orders, food counts,
                  total_revenue), highest revenue first.
        """
        orders = DailyOrder.objects.filter(date__range=(start_date, end_date))

        totals = orders.aggregate(
            total_orders=Count('id'),
            total_veg_food=Sum('total_veg_food'),
            total_non_veg_food=Sum('total_non_veg_food'),
            total_food=Sum('total_food'),
            total_revenue=Sum('total_amount'),
        )
        if not totals['total_orders']:
            return None

        total_revenue = totals['total_revenue'] or Decimal('0.00')
        summary = {
            'total_orders': totals['total_orders'],
            'total_veg_food': totals['total_veg_food'] or 0,
            'total_non_veg_food': totals['total_non_veg_food'] or 0,
            'total_food': totals['total_food'] or 0,
            'total_revenue': total_revenue,
            'average_order_value': _money(total_revenue / totals['total_orders']),
        }

        per_driver = (
            orders
            .values('driver_id', 'driver__name', 'driver__route')
            .annotate(
                orders_count=Count('id'),
                veg=Sum('total_veg_food'),
                non_veg=Sum('total_non_veg_food'),
                food=Sum('total_food'),
                revenue=Sum('total_amount'),
            )
            .order_by('-revenue', 'driver__name')
        )

        driver_summary = [
            {
                'driver_id': row['driver_id'],
                'driver_name': row['driver__name'],
                'route': row['driver__route'],
                'total_orders': row['orders_count'],
                'total_veg_food': row['veg'] or 0,
                'total_non_veg_food': row['non_veg'] or 0,
                'total_food': row['food'] or 0,
                'total_revenue': row['revenue'] or Decimal('0.00'),
            }
            for row in per_driver
        ]

        return {
            'start_date': start_date,
            'end_date': end_date,
            'summary': summary,
            'driver_summary': driver_summary,
        }

    @staticmethod
    def customer_monthly(customer_id, start_date, end_date, tax_rate=None):
        """
        Itemized calculation of what a customer owes for a period.

        Every category the customer subscribes to appears in the breakdown
        (with zero quantity if nothing was delivered); categories that only
        appear in past order items, for example after a package was
        removed, are added at the price they were delivered at.

        Args:
            customer_id (UUID): The customer.
            start_date (date): First day of the period.
            end_date (date): Last day of the period.
            tax_rate (Decimal, optional): Fraction between 0 and 1.
                Defaults to ``settings.CATERING['DEFAULT_TAX_RATE']``.

        Returns:
            dict | None: ``None`` if the customer has no order items in the
            period, otherwise customer and driver identity, the period,
            ``total_days`` (working days), ``package_breakdown``, food
            counts, ``subtotal``, ``tax_rate``, ``tax`` and
            ``total_amount``.

        Raises:
            CustomerNotFoundError: If the customer doesn't exist.

        Example:
            A customer with a 60.00 thali delivered "5,5+7" on two days::

                calc['package_breakdown'][0]['total_quantity']  # 34
                calc['subtotal']                                # Decimal('2040.00')
                calc['tax']                                     # Decimal('367.20')
        """
        if tax_rate is None:
            tax_rate = settings.CATERING['DEFAULT_TAX_RATE']
        tax_rate = Decimal(str(tax_rate))

        customer = (
            Customer.objects
            .select_related('driver')
            .prefetch_related('packages__category')
            .filter(id=customer_id)
            .first()
        )
        if customer is None:
            raise CustomerNotFoundError("Customer not found")

        items = list(
            OrderItem.objects
            .filter(
                customer_id=customer_id,
                daily_order__date__range=(start_date, end_date),
            )
            .select_related('category')
        )
        if not items:
            return None

        breakdown = {}
        for package in customer.packages.all():
            breakdown[package.category_id] = {
                'category_id': package.category_id,
                'category_name': package.category.name,
                'unit_price': package.unit_price,
                'total_quantity': 0,
                'total_amount': Decimal('0.00'),
            }

        total_veg_food = 0
        total_non_veg_food = 0
        for item in items:
            entry = breakdown.setdefault(item.category_id, {
                'category_id': item.category_id,
                'category_name': item.category.name,
                'unit_price': item.unit_price,
                'total_quantity': 0,
                'total_amount': Decimal('0.00'),
            })
            entry['total_quantity'] += item.total_count
            entry['total_amount'] += item.total_amount
            total_veg_food += item.veg_count
            total_non_veg_food += item.non_veg_count

        package_breakdown = list(breakdown.values())
        subtotal = sum(
            (entry['total_amount'] for entry in package_breakdown),
            Decimal('0.00')
        )
        tax = _money(subtotal * tax_rate)

        return {
            'customer_id': customer.id,
            'customer_name': customer.name,
            'driver_id': customer.driver_id,
            'driver_name': customer.driver.name,
            'start_date': start_date,
            'end_date': end_date,
            'total_days': CalculationEngine.working_days(start_date, end_date),
            'package_breakdown': package_breakdown,
            'total_veg_food': total_veg_food,
            'total_non_veg_food': total_non_veg_food,
            'total_food': total_veg_food + total_non_veg_food,
            'subtotal': subtotal,
            'tax_rate': tax_rate,
            'tax': tax,
            'total_amount': subtotal + tax,
        }

    @staticmethod
    def profit_analysis(start_date, end_date, cost_per_meal=None):
        """
        Estimate gross profit for a date range.

        Args:
            start_date (date): First day of the range.
            end_date (date): Last day of the range.
            cost_per_meal (Decimal, optional): Estimated cost of one meal.
                Defaults to ``settings.CATERING['DEFAULT_COST_PER_MEAL']``.

        Returns:
            dict | None: ``None`` if the range has no orders, otherwise
            total_revenue, total_food, estimated_cost_per_meal, total_cost,
            gross_profit and profit_margin (percent, 2 dp, 0 without
            revenue).
        """
        if cost_per_meal is None:
            cost_per_meal = settings.CATERING['DEFAULT_COST_PER_MEAL']
        cost_per_meal = Decimal(str(cost_per_meal))

        totals = CalculationEngine.range_totals(start_date, end_date)
        if totals is None:
            return None

        summary = totals['summary']
        total_revenue = summary['total_revenue']
        total_cost = cost_per_meal * summary['total_food']
        gross_profit = total_revenue - total_cost

        if total_revenue > 0:
            profit_margin = _money(gross_profit / total_revenue * 100)
        else:
            profit_margin = Decimal('0.00')

        return {
            'start_date': start_date,
            'end_date': end_date,
            'total_revenue': total_revenue,
            'total_food': summary['total_food'],
            'estimated_cost_per_meal': cost_per_meal,
            'total_cost': total_cost,
            'gross_profit': gross_profit,
            'profit_margin': profit_margin,
        }

    @staticmethod
    def validate_and_parse_bag_format(bag_format):
        """
        Check a bag format the way the validation endpoint reports it.

        Returns:
            dict: ``is_valid``, ``parsed`` (counts, or ``None`` when
            invalid) and ``error`` (``None`` when valid). Zero-meal formats
            are invalid.
        """
        result = validate_bag_format(bag_format)
        return {
            'is_valid': result.is_valid,
            'parsed': result.counts.as_dict() if result.is_valid else None,
            'error': result.error,
        }
