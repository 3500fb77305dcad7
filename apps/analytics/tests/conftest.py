import pytest
from decimal import Decimal
from datetime import date, datetime, timezone
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.catalog.models import FoodCategory
from apps.customers.models import Customer, CustomerPackage
from apps.drivers.models import Driver
from apps.orders.services import generate_daily_orders

# Monday and Tuesday of the first full week of March 2025
ORDER_DAYS = [date(2025, 3, 3), date(2025, 3, 4)]
MARCH_START = date(2025, 3, 1)
MARCH_END = date(2025, 3, 31)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def auth_client(api_client, db):
    """Return API client authenticated as an accounts clerk."""
    user = User.objects.create_user(username='accounts', password='TestPass123!')
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def thali(db):
    return FoodCategory.objects.create(name='Thali')


@pytest.fixture
def special(db):
    return FoodCategory.objects.create(name='Special')


@pytest.fixture
def downtown_customer(db, thali):
    """'5,5+7' lunch, one thali at 60.00: 17 meals and 1020.00 per day."""
    driver = Driver.objects.create(name='John Driver', route='Downtown')
    customer = Customer.objects.create(
        name='Asha Patel',
        address='12 Park Street',
        driver=driver,
        lunch_bag_format='5,5+7',
        start_date=date(2025, 1, 1),
    )
    CustomerPackage.objects.create(customer=customer, category=thali, unit_price=Decimal('60.00'))
    return customer


@pytest.fixture
def suburb_customer(db, thali, special):
    """'4' lunch and '2+1' dinner on two packages: 14 meals and 910.00 per day."""
    driver = Driver.objects.create(name='Mike Delivery', route='Suburbs')
    customer = Customer.objects.create(
        name='Ravi Kumar',
        address='7 Lake Road',
        driver=driver,
        lunch_bag_format='4',
        dinner_bag_format='2+1',
        start_date=date(2025, 1, 1),
    )
    CustomerPackage.objects.create(customer=customer, category=thali, unit_price=Decimal('50.00'))
    CustomerPackage.objects.create(customer=customer, category=special, unit_price=Decimal('80.00'))
    return customer


@pytest.fixture
def two_days_of_orders(downtown_customer, suburb_customer):
    """Orders on both ORDER_DAYS: 31 meals and 1930.00 per day."""
    orders = []
    for day in ORDER_DAYS:
        start = datetime(day.year, day.month, day.day, 10, 0, tzinfo=timezone.utc)
        orders.extend(generate_daily_orders(date=day, nea_start_time=start))
    return orders
