import uuid
import pytest
from decimal import Decimal
from datetime import date, timedelta
from apps.customers.models import Customer
from apps.orders.exceptions import (
    DailyOrdersAlreadyExistError,
    DailyOrderNotFoundError,
    InvalidBagFormatError,
    OrderItemNotFoundError,
)
from apps.orders.models import DailyOrder, OrderItem, OrderStatus
from apps.orders.services import (
    generate_daily_orders,
    order_summary,
    update_order_item,
    update_order_status,
)
from .conftest import ORDER_DATE, NEA_START


@pytest.mark.django_db
class TestGenerateDailyOrders:

    def test_one_order_per_driver(self, generated_orders, driver, other_driver):
        assert len(generated_orders) == 2
        assert {order.driver_id for order in generated_orders} == {driver.id, other_driver.id}

    def test_single_package_totals(self, generated_orders, driver):
        order = DailyOrder.objects.get(date=ORDER_DATE, driver=driver)

        assert order.items.count() == 1
        assert order.total_non_veg_food == 10
        assert order.total_veg_food == 7
        assert order.total_food == 17
        assert order.total_amount == Decimal('1020.00')

    def test_one_item_per_meal_and_package(self, generated_orders, other_driver):
        order = DailyOrder.objects.get(date=ORDER_DATE, driver=other_driver)

        assert order.items.count() == 4
        assert order.total_food == 14
        assert order.total_amount == Decimal('910.00')

        dinner_special = order.items.get(meal_type='dinner', category__name='Special')
        assert dinner_special.bag_format == '2+1'
        assert dinner_special.total_count == 3
        assert dinner_special.total_amount == Decimal('240.00')

    def test_totals_equal_item_sums(self, generated_orders):
        for order in generated_orders:
            items = list(order.items.all())
            assert order.total_food == sum(item.total_count for item in items)
            assert order.total_amount == sum(item.total_amount for item in items)

    def test_nea_window_defaults_to_four_hours(self, generated_orders):
        for order in generated_orders:
            assert order.nea_start_time == NEA_START
            assert order.nea_end_time == NEA_START + timedelta(hours=4)

    def test_custom_duration(self, customer):
        orders = generate_daily_orders(date=ORDER_DATE, nea_start_time=NEA_START, duration_hours=2)

        assert orders[0].nea_end_time == NEA_START + timedelta(hours=2)

    def test_second_generation_rejected(self, generated_orders):
        with pytest.raises(DailyOrdersAlreadyExistError):
            generate_daily_orders(date=ORDER_DATE, nea_start_time=NEA_START)

        assert DailyOrder.objects.filter(date=ORDER_DATE).count() == 2

    def test_inactive_and_out_of_range_customers_skipped(self, customer, two_package_customer):
        customer.is_active = False
        customer.save()
        two_package_customer.start_date = ORDER_DATE + timedelta(days=1)
        two_package_customer.save()

        orders = generate_daily_orders(date=ORDER_DATE, nea_start_time=NEA_START)

        assert orders == []
        assert not DailyOrder.objects.exists()

    def test_ended_customer_skipped(self, customer):
        customer.end_date = ORDER_DATE - timedelta(days=1)
        customer.save()

        assert generate_daily_orders(date=ORDER_DATE, nea_start_time=NEA_START) == []

    def test_end_date_is_inclusive(self, customer):
        customer.end_date = ORDER_DATE
        customer.save()

        assert len(generate_daily_orders(date=ORDER_DATE, nea_start_time=NEA_START)) == 1

    def test_customer_without_packages_gets_no_items(self, driver):
        Customer.objects.create(
            name='No Package',
            address='1 Side Lane',
            driver=driver,
            lunch_bag_format='3',
            start_date=date(2025, 1, 1),
        )

        assert generate_daily_orders(date=ORDER_DATE, nea_start_time=NEA_START) == []

    def test_invalid_stored_format_is_skipped(self, customer, thali):
        # Only the API serializers validate stored formats.
        Customer.objects.filter(id=customer.id).update(dinner_bag_format='5,,3')

        orders = generate_daily_orders(date=ORDER_DATE, nea_start_time=NEA_START)

        assert OrderItem.objects.filter(daily_order=orders[0]).count() == 1
        assert orders[0].total_food == 17


@pytest.mark.django_db
class TestUpdateOrderItem:

    def test_recalculates_item_and_order(self, generated_orders, driver):
        order = DailyOrder.objects.get(date=ORDER_DATE, driver=driver)
        item = order.items.get()

        updated = update_order_item(order_id=order.id, item_id=item.id, bag_format='4,4+2')

        item.refresh_from_db()
        assert item.bag_format == '4,4+2'
        assert item.non_veg_count == 8
        assert item.veg_count == 2
        assert item.total_amount == Decimal('600.00')
        assert updated.total_food == 10
        assert updated.total_amount == Decimal('600.00')

    def test_item_from_other_order(self, generated_orders, driver, other_driver):
        order = DailyOrder.objects.get(date=ORDER_DATE, driver=driver)
        foreign_item = DailyOrder.objects.get(date=ORDER_DATE, driver=other_driver).items.first()

        with pytest.raises(OrderItemNotFoundError):
            update_order_item(order_id=order.id, item_id=foreign_item.id, bag_format='1')

    def test_missing_order(self, db):
        with pytest.raises(DailyOrderNotFoundError):
            update_order_item(order_id=uuid.uuid4(), item_id=uuid.uuid4(), bag_format='1')

    def test_invalid_format_leaves_item_unchanged(self, generated_orders, driver):
        order = DailyOrder.objects.get(date=ORDER_DATE, driver=driver)
        item = order.items.get()

        with pytest.raises(InvalidBagFormatError):
            update_order_item(order_id=order.id, item_id=item.id, bag_format='5+3+1')

        item.refresh_from_db()
        assert item.bag_format == '5,5+7'


@pytest.mark.django_db
class TestStatusAndSummary:

    def test_update_status(self, generated_orders):
        order = generated_orders[0]

        updated = update_order_status(order_id=order.id, status=OrderStatus.COMPLETED)

        assert updated.status == OrderStatus.COMPLETED

    def test_update_status_missing_order(self, db):
        with pytest.raises(DailyOrderNotFoundError):
            update_order_status(order_id=uuid.uuid4(), status=OrderStatus.COMPLETED)

    def test_summary_totals(self, generated_orders):
        summary = order_summary()

        assert summary['total_orders'] == 2
        assert summary['total_food'] == 31
        assert summary['total_veg_food'] == 9
        assert summary['total_non_veg_food'] == 22
        assert summary['total_revenue'] == Decimal('1930.00')

    def test_summary_empty_range(self, generated_orders):
        summary = order_summary(
            start_date=ORDER_DATE + timedelta(days=1),
            end_date=ORDER_DATE + timedelta(days=7),
        )

        assert summary['total_orders'] == 0
        assert summary['total_food'] == 0
        assert summary['total_revenue'] == Decimal('0.00')
