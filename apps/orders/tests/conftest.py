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

ORDER_DATE = date(2025, 3, 3)  # Monday
NEA_START = datetime(2025, 3, 3, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(username='dispatcher', password='TestPass123!')


@pytest.fixture
def auth_client(api_client, staff_user):
    """Return API client authenticated with a JWT."""
    refresh = RefreshToken.for_user(staff_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


# =============================================================================
# Directory data
# =============================================================================

@pytest.fixture
def thali(db):
    return FoodCategory.objects.create(name='Thali')


@pytest.fixture
def special(db):
    return FoodCategory.objects.create(name='Special')


@pytest.fixture
def driver(db):
    return Driver.objects.create(name='John Driver', route='Downtown')


@pytest.fixture
def other_driver(db):
    return Driver.objects.create(name='Mike Delivery', route='Suburbs')


@pytest.fixture
def customer(driver, thali):
    """Customer with lunch '5,5+7' (17 meals) and no dinner, thali at 60.00."""
    customer = Customer.objects.create(
        name='Asha Patel',
        address='12 Park Street',
        driver=driver,
        lunch_bag_format='5,5+7',
        dinner_bag_format='',
        start_date=date(2025, 1, 1),
    )
    CustomerPackage.objects.create(customer=customer, category=thali, unit_price=Decimal('60.00'))
    return customer


@pytest.fixture
def two_package_customer(other_driver, thali, special):
    """Customer with lunch '4' and dinner '2+1', two packages."""
    customer = Customer.objects.create(
        name='Ravi Kumar',
        address='7 Lake Road',
        driver=other_driver,
        lunch_bag_format='4',
        dinner_bag_format='2+1',
        start_date=date(2025, 1, 1),
    )
    CustomerPackage.objects.create(customer=customer, category=thali, unit_price=Decimal('50.00'))
    CustomerPackage.objects.create(customer=customer, category=special, unit_price=Decimal('80.00'))
    return customer


@pytest.fixture
def generated_orders(customer, two_package_customer):
    """Daily orders for ORDER_DATE for both customers."""
    return generate_daily_orders(date=ORDER_DATE, nea_start_time=NEA_START)
