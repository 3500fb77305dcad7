import pytest
from datetime import date
from decimal import Decimal
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.catalog.models import FoodCategory
from apps.customers.models import Company, Customer, CustomerPackage
from apps.drivers.models import Driver


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(username='office', password='TestPass123!')


@pytest.fixture
def auth_client(api_client, staff_user):
    """Return API client authenticated with a JWT."""
    refresh = RefreshToken.for_user(staff_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def driver(db):
    return Driver.objects.create(name='John Driver', route='Downtown')


@pytest.fixture
def thali(db):
    return FoodCategory.objects.create(name='Thali')


@pytest.fixture
def special(db):
    return FoodCategory.objects.create(name='Special')


@pytest.fixture
def company(db):
    return Company.objects.create(name='ABC Corporation', address='123 Business St')


@pytest.fixture
def customer(driver, thali):
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
def customer_payload(driver, thali):
    return {
        'name': 'Ravi Kumar',
        'address': '7 Lake Road',
        'driver': str(driver.id),
        'lunch_bag_format': '4',
        'dinner_bag_format': '2+1',
        'start_date': '2025-01-01',
        'packages': [{'category': str(thali.id), 'unit_price': '50.00'}],
    }
