import pytest
from django.urls import reverse
from rest_framework import status
from apps.catalog.models import FoodCategory


@pytest.mark.django_db
class TestFoodCategories:

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('catalog:food-category-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create(self, auth_client):
        response = auth_client.post(reverse('catalog:food-category-list'), {
            'name': 'Special',
            'description': 'Thali with sweet',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data']['name'] == 'Special'

    def test_duplicate_name(self, auth_client, thali):
        response = auth_client.post(reverse('catalog:food-category-list'), {'name': 'Thali'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'name'

    def test_list_only_active(self, auth_client, thali):
        FoodCategory.objects.create(name='Seasonal', is_active=False)

        response = auth_client.get(reverse('catalog:food-category-list'))

        assert [c['name'] for c in response.data['data']] == ['Thali']

    def test_delete_deactivates(self, auth_client, thali):
        response = auth_client.delete(reverse('catalog:food-category-detail', args=[thali.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Food category deactivated successfully'
        thali.refresh_from_db()
        assert thali.is_active is False
