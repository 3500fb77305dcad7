import pytest
from decimal import Decimal
from datetime import date, datetime, timezone
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.billing.services import generate_monthly_bills
from apps.catalog.models import FoodCategory
from apps.customers.models import BillingType, Company, Customer, CustomerPackage
from apps.drivers.models import Driver
from apps.orders.services import generate_daily_orders

ORDER_DAYS = [date(2025, 3, 3), date(2025, 3, 4)]


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
def driver(db):
    return Driver.objects.create(name='John Driver', route='Downtown')


@pytest.fixture
def company(db):
    return Company.objects.create(name='ABC Corporation', address='123 Business St')


def _customer(name, driver, category, lunch, price, company=None):
    customer = Customer.objects.create(
        name=name,
        address='123 Business St',
        driver=driver,
        company=company,
        billing_type=BillingType.COMPANY if company else BillingType.INDIVIDUAL,
        lunch_bag_format=lunch,
        start_date=date(2025, 1, 1),
    )
    CustomerPackage.objects.create(customer=customer, category=category, unit_price=Decimal(price))
    return customer


@pytest.fixture
def floor_two(driver, thali, company):
    """Company-billed, 5 meals at 50.00: 250.00 per day."""
    return _customer('ABC Floor 2', driver, thali, '5', '50.00', company)


@pytest.fixture
def floor_five(driver, thali, company):
    """Company-billed, 3 meals at 50.00: 150.00 per day."""
    return _customer('ABC Floor 5', driver, thali, '3', '50.00', company)


@pytest.fixture
def solo(driver, thali):
    """Pays for itself, '4+1' at 80.00: 400.00 per day."""
    return _customer('Solo Diner', driver, thali, '4+1', '80.00')


@pytest.fixture
def march_orders(floor_two, floor_five, solo):
    """Two days of orders: March bills of 500, 300 and 800, company 800."""
    for day in ORDER_DAYS:
        start = datetime(day.year, day.month, day.day, 10, 0, tzinfo=timezone.utc)
        generate_daily_orders(date=day, nea_start_time=start)


@pytest.fixture
def march_bills(march_orders):
    return generate_monthly_bills(year=2025, month=3)
