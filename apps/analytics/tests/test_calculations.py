import uuid
import pytest
from decimal import Decimal
from datetime import date
from apps.analytics.calculations import CalculationEngine
from apps.customers.exceptions import CustomerNotFoundError
from apps.customers.models import CustomerPackage
from .conftest import ORDER_DAYS, MARCH_START, MARCH_END


class TestWorkingDays:

    def test_full_week(self):
        assert CalculationEngine.working_days(date(2025, 3, 3), date(2025, 3, 9)) == 5

    def test_weekend_only(self):
        assert CalculationEngine.working_days(date(2025, 3, 8), date(2025, 3, 9)) == 0

    def test_single_weekday_is_inclusive(self):
        assert CalculationEngine.working_days(date(2025, 3, 5), date(2025, 3, 5)) == 1

    def test_march_2025(self):
        assert CalculationEngine.working_days(MARCH_START, MARCH_END) == 21

    def test_reversed_range(self):
        assert CalculationEngine.working_days(date(2025, 3, 9), date(2025, 3, 3)) == 0


@pytest.mark.django_db
class TestDailyTotals:

    def test_no_orders(self):
        assert CalculationEngine.daily_totals(ORDER_DAYS[0]) is None

    def test_totals_and_breakdown(self, two_days_of_orders):
        totals = CalculationEngine.daily_totals(ORDER_DAYS[0])

        assert totals['total_food'] == 31
        assert totals['total_veg_food'] == 9
        assert totals['total_non_veg_food'] == 22
        assert totals['total_amount'] == Decimal('1930.00')

        names = [row['driver_name'] for row in totals['driver_breakdown']]
        assert names == ['John Driver', 'Mike Delivery']
        assert totals['driver_breakdown'][0]['total_amount'] == Decimal('1020.00')
        assert totals['driver_breakdown'][1]['total_count'] == 14

    def test_breakdown_sums_to_totals(self, two_days_of_orders):
        totals = CalculationEngine.daily_totals(ORDER_DAYS[1])
        breakdown = totals['driver_breakdown']

        assert sum(row['total_count'] for row in breakdown) == totals['total_food']
        assert sum(row['total_amount'] for row in breakdown) == totals['total_amount']


@pytest.mark.django_db
class TestRangeTotals:

    def test_no_orders(self):
        assert CalculationEngine.range_totals(MARCH_START, MARCH_END) is None

    def test_summary(self, two_days_of_orders):
        totals = CalculationEngine.range_totals(MARCH_START, MARCH_END)
        summary = totals['summary']

        assert summary['total_orders'] == 4
        assert summary['total_food'] == 62
        assert summary['total_revenue'] == Decimal('3860.00')
        assert summary['average_order_value'] == Decimal('965.00')

    def test_drivers_ranked_by_revenue(self, two_days_of_orders):
        totals = CalculationEngine.range_totals(MARCH_START, MARCH_END)

        revenues = [row['total_revenue'] for row in totals['driver_summary']]
        assert revenues == [Decimal('2040.00'), Decimal('1820.00')]
        assert totals['driver_summary'][0]['total_orders'] == 2

    def test_range_bounds_are_inclusive(self, two_days_of_orders):
        totals = CalculationEngine.range_totals(ORDER_DAYS[1], ORDER_DAYS[1])

        assert totals['summary']['total_orders'] == 2


@pytest.mark.django_db
class TestCustomerMonthly:

    def test_unknown_customer(self):
        with pytest.raises(CustomerNotFoundError):
            CalculationEngine.customer_monthly(uuid.uuid4(), MARCH_START, MARCH_END)

    def test_no_items_in_period(self, two_days_of_orders, downtown_customer):
        result = CalculationEngine.customer_monthly(
            downtown_customer.id, date(2025, 4, 1), date(2025, 4, 30)
        )

        assert result is None

    def test_single_package_with_default_tax(self, two_days_of_orders, downtown_customer):
        result = CalculationEngine.customer_monthly(downtown_customer.id, MARCH_START, MARCH_END)

        assert result['total_days'] == 21
        assert result['total_food'] == 34
        assert result['total_veg_food'] == 14
        assert result['package_breakdown'][0]['total_quantity'] == 34
        assert result['subtotal'] == Decimal('2040.00')
        assert result['tax_rate'] == Decimal('0.18')
        assert result['tax'] == Decimal('367.20')
        assert result['total_amount'] == Decimal('2407.20')

    def test_breakdown_per_category(self, two_days_of_orders, suburb_customer):
        result = CalculationEngine.customer_monthly(
            suburb_customer.id, MARCH_START, MARCH_END, tax_rate=Decimal('0')
        )

        by_name = {entry['category_name']: entry for entry in result['package_breakdown']}
        assert by_name['Thali']['total_quantity'] == 14
        assert by_name['Thali']['total_amount'] == Decimal('700.00')
        assert by_name['Special']['total_amount'] == Decimal('1120.00')
        assert result['subtotal'] == Decimal('1820.00')
        assert result['tax'] == Decimal('0.00')
        assert result['total_amount'] == result['subtotal']

    def test_removed_package_still_billed(self, two_days_of_orders, suburb_customer, special):
        CustomerPackage.objects.filter(customer=suburb_customer, category=special).delete()

        result = CalculationEngine.customer_monthly(suburb_customer.id, MARCH_START, MARCH_END)

        by_name = {entry['category_name']: entry for entry in result['package_breakdown']}
        assert by_name['Special']['unit_price'] == Decimal('80.00')
        assert by_name['Special']['total_quantity'] == 14

    def test_subscribed_package_without_deliveries(
        self, two_days_of_orders, downtown_customer, special
    ):
        CustomerPackage.objects.create(
            customer=downtown_customer, category=special, unit_price=Decimal('90.00')
        )

        result = CalculationEngine.customer_monthly(downtown_customer.id, MARCH_START, MARCH_END)

        by_name = {entry['category_name']: entry for entry in result['package_breakdown']}
        assert by_name['Special']['total_quantity'] == 0
        assert result['subtotal'] == Decimal('2040.00')

    def test_tax_rounds_half_up(self, two_days_of_orders, downtown_customer):
        result = CalculationEngine.customer_monthly(
            downtown_customer.id, MARCH_START, MARCH_END, tax_rate=Decimal('0.000375')
        )

        # 2040.00 * 0.000375 = 0.765
        assert result['tax'] == Decimal('0.77')


@pytest.mark.django_db
class TestProfitAnalysis:

    def test_no_orders(self):
        assert CalculationEngine.profit_analysis(MARCH_START, MARCH_END) is None

    def test_default_cost_per_meal(self, two_days_of_orders):
        result = CalculationEngine.profit_analysis(MARCH_START, MARCH_END)

        assert result['estimated_cost_per_meal'] == Decimal('25')
        assert result['total_cost'] == Decimal('1550')
        assert result['gross_profit'] == Decimal('2310.00')
        assert result['profit_margin'] == Decimal('59.84')

    def test_custom_cost_per_meal(self, two_days_of_orders):
        result = CalculationEngine.profit_analysis(MARCH_START, MARCH_END, Decimal('100'))

        assert result['gross_profit'] == Decimal('-2340.00')
        assert result['profit_margin'] == Decimal('-60.62')


class TestValidateAndParse:

    def test_valid(self):
        result = CalculationEngine.validate_and_parse_bag_format('5,5+7')

        assert result == {
            'is_valid': True,
            'parsed': {'non_veg_count': 10, 'veg_count': 7, 'total_count': 17},
            'error': None,
        }

    def test_invalid(self):
        result = CalculationEngine.validate_and_parse_bag_format('5+')

        assert result['is_valid'] is False
        assert result['parsed'] is None
        assert result['error']

    def test_zero_meals_invalid(self):
        assert CalculationEngine.validate_and_parse_bag_format('0')['is_valid'] is False
