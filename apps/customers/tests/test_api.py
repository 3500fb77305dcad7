import uuid
import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.customers.models import BillingType, Company, Customer


@pytest.mark.django_db
class TestCustomerCrud:

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('customers:customer-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create_with_packages(self, auth_client, customer_payload):
        response = auth_client.post(reverse('customers:customer-list'), customer_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        data = response.data['data']
        assert data['driver_detail']['name'] == 'John Driver'
        assert data['billing_type'] == BillingType.INDIVIDUAL
        assert data['packages'][0]['category_name'] == 'Thali'
        assert data['packages'][0]['unit_price'] == '50.00'

    def test_invalid_standing_bag_format(self, auth_client, customer_payload):
        customer_payload['lunch_bag_format'] = '5,,3'

        response = auth_client.post(reverse('customers:customer-list'), customer_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'lunch_bag_format'
        assert not Customer.objects.exists()

    def test_oversized_standing_bag_format(self, auth_client, customer_payload):
        customer_payload['lunch_bag_format'] = '99999999999'

        response = auth_client.post(reverse('customers:customer-list'), customer_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'lunch_bag_format'
        assert not Customer.objects.exists()

    def test_unit_price_above_limit(self, auth_client, customer_payload):
        customer_payload['packages'][0]['unit_price'] = '100000.00'

        response = auth_client.post(reverse('customers:customer-list'), customer_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'].startswith('packages')
        assert not Customer.objects.exists()

    def test_blank_dinner_allowed(self, auth_client, customer_payload):
        customer_payload['dinner_bag_format'] = ''

        response = auth_client.post(reverse('customers:customer-list'), customer_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data']['dinner_bag_format'] == ''

    def test_packages_required(self, auth_client, customer_payload):
        customer_payload['packages'] = []

        response = auth_client.post(reverse('customers:customer-list'), customer_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'packages'

    def test_duplicate_package_category(self, auth_client, customer_payload, thali):
        customer_payload['packages'].append({'category': str(thali.id), 'unit_price': '55.00'})

        response = auth_client.post(reverse('customers:customer-list'), customer_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_company_billing_needs_company(self, auth_client, customer_payload):
        customer_payload['billing_type'] = BillingType.COMPANY

        response = auth_client.post(reverse('customers:customer-list'), customer_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'company'

    def test_end_before_start(self, auth_client, customer_payload):
        customer_payload['end_date'] = '2024-12-31'

        response = auth_client.post(reverse('customers:customer-list'), customer_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'end_date'

    def test_update_replaces_packages(self, auth_client, customer, customer_payload, special):
        customer_payload['packages'] = [{'category': str(special.id), 'unit_price': '80.00'}]

        response = auth_client.put(
            reverse('customers:customer-detail', args=[customer.id]), customer_payload, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert [p.category.name for p in customer.packages.all()] == ['Special']
        assert customer.packages.get().unit_price == Decimal('80.00')

    def test_delete_deactivates(self, auth_client, customer):
        response = auth_client.delete(reverse('customers:customer-detail', args=[customer.id]))

        assert response.data['message'] == 'Customer deactivated successfully'
        customer.refresh_from_db()
        assert customer.is_active is False
        assert auth_client.get(reverse('customers:customer-list')).data['data'] == []

    def test_by_driver(self, auth_client, customer, driver):
        response = auth_client.get(reverse('customers:customer-by-driver', args=[driver.id]))

        assert [c['name'] for c in response.data['data']] == ['Asha Patel']

    def test_by_unknown_driver(self, auth_client):
        response = auth_client.get(reverse('customers:customer-by-driver', args=[uuid.uuid4()]))

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestDailyFood:

    def test_patch_one_meal(self, auth_client, customer):
        url = reverse('customers:customer-daily-food', args=[customer.id])

        response = auth_client.patch(url, {'dinner': ' 3+1 '}, format='json')

        assert response.status_code == status.HTTP_200_OK
        customer.refresh_from_db()
        assert customer.lunch_bag_format == '5,5+7'
        assert customer.dinner_bag_format == '3+1'

    def test_clear_meal(self, auth_client, customer):
        url = reverse('customers:customer-daily-food', args=[customer.id])

        auth_client.patch(url, {'lunch': ''}, format='json')

        customer.refresh_from_db()
        assert customer.lunch_bag_format == ''

    def test_invalid_format(self, auth_client, customer):
        url = reverse('customers:customer-daily-food', args=[customer.id])

        response = auth_client.patch(url, {'lunch': '5+3+1'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'lunch'

    def test_oversized_format(self, auth_client, customer):
        url = reverse('customers:customer-daily-food', args=[customer.id])

        response = auth_client.patch(url, {'lunch': '99999999999'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'lunch'
        customer.refresh_from_db()
        assert customer.lunch_bag_format == '5,5+7'

    def test_unknown_customer(self, auth_client):
        url = reverse('customers:customer-daily-food', args=[uuid.uuid4()])

        response = auth_client.patch(url, {'lunch': '1'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_bulk_update(self, auth_client, customer, driver):
        other = Customer.objects.create(
            name='Ravi Kumar', address='7 Lake Road', driver=driver, start_date=customer.start_date
        )

        response = auth_client.patch(reverse('customers:customer-bulk-update-daily-food'), {
            'updates': [
                {'customer': str(customer.id), 'meal_type': 'lunch', 'bag_format': '6'},
                {'customer': str(customer.id), 'meal_type': 'dinner', 'bag_format': '2+2'},
                {'customer': str(other.id), 'meal_type': 'lunch', 'bag_format': '1+1'},
            ]
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data'] == {'updated_customers': 2}
        customer.refresh_from_db()
        other.refresh_from_db()
        assert (customer.lunch_bag_format, customer.dinner_bag_format) == ('6', '2+2')
        assert other.lunch_bag_format == '1+1'

    def test_bulk_update_is_atomic(self, auth_client, customer):
        response = auth_client.patch(reverse('customers:customer-bulk-update-daily-food'), {
            'updates': [
                {'customer': str(customer.id), 'meal_type': 'lunch', 'bag_format': '6'},
                {'customer': str(uuid.uuid4()), 'meal_type': 'lunch', 'bag_format': '1'},
            ]
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        customer.refresh_from_db()
        assert customer.lunch_bag_format == '5,5+7'

    def test_bulk_update_rejects_bad_format(self, auth_client, customer):
        response = auth_client.patch(reverse('customers:customer-bulk-update-daily-food'), {
            'updates': [{'customer': str(customer.id), 'meal_type': 'lunch', 'bag_format': 'x'}]
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'updates[0].bag_format'


@pytest.mark.django_db
class TestCompanies:

    def test_create(self, auth_client):
        response = auth_client.post(reverse('customers:company-list'), {
            'name': 'XYZ Tech',
            'address': '456 Tech Park',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED

    def test_name_unique_ignoring_case(self, auth_client, company):
        response = auth_client.post(reverse('customers:company-list'), {
            'name': 'abc corporation',
            'address': 'Elsewhere',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'] == [
            {'field': 'name', 'message': 'Company with this name already exists'}
        ]

    def test_company_customers(self, auth_client, company, customer):
        customer.company = company
        customer.billing_type = BillingType.COMPANY
        customer.save()

        response = auth_client.get(reverse('customers:company-customers', args=[company.id]))

        assert [c['name'] for c in response.data['data']] == ['Asha Patel']

    def test_delete_refused_with_customers(self, auth_client, company, customer):
        customer.company = company
        customer.save()

        response = auth_client.delete(reverse('customers:company-detail', args=[company.id]))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'].startswith('Cannot delete company. It has 1 associated customers.')
        assert Company.objects.filter(id=company.id).exists()

    def test_delete(self, auth_client, company):
        response = auth_client.delete(reverse('customers:company-detail', args=[company.id]))

        assert response.status_code == status.HTTP_200_OK
        assert not Company.objects.exists()
