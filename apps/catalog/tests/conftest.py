import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.catalog.models import FoodCategory


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
def thali(db):
    return FoodCategory.objects.create(name='Thali', description='Rice, dal and two curries')
