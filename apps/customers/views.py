from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from config.envelope import EnvelopeMixin, success_response, UUID_LOOKUP_REGEX
from config.mixins import SoftDeleteMixin
from apps.drivers.models import Driver
from .models import Company, Customer
from .serializers import (
    CompanySerializer,
    CustomerSerializer,
    DailyFoodInputSerializer,
    BulkDailyFoodInputSerializer,
)
from .services import (
    create_customer,
    update_customer,
    update_daily_food,
    bulk_update_daily_food,
    delete_company,
)
from .exceptions import (
    CustomerNotFoundError,
    CompanyNotFoundError,
    CompanyHasCustomersError,
)


def _active_customers():
    return (
        Customer.objects
        .filter(is_active=True)
        .select_related('driver', 'company')
        .prefetch_related('packages__category')
        .order_by('name')
    )


class CompanyViewSet(EnvelopeMixin, viewsets.ModelViewSet):
    """
    ViewSet for Company CRUD operations.

    list: Get all active companies
    create: Create a company (name unique, case-insensitive)
    retrieve: Get a specific company
    update: Update a company
    destroy: Delete a company without customers
    customers: Active customers billed through the company
    """

    serializer_class = CompanySerializer
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_queryset(self):
        if self.action == 'list':
            return Company.objects.filter(is_active=True).order_by('name')
        return Company.objects.all()

    def destroy(self, request, *args, **kwargs):
        """Hard delete, refused while customers reference the company."""
        try:
            delete_company(company_id=kwargs.get('pk'))
        except CompanyNotFoundError as e:
            raise NotFound(str(e))
        except CompanyHasCustomersError as e:
            return Response(
                {'success': False, 'message': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return success_response(message='Company deleted successfully')

    @action(detail=True, methods=['get'])
    def customers(self, request, pk=None):
        """
        Get active customers of this company.

        GET /api/companies/{id}/customers/
        """
        company = self.get_object()
        customers = _active_customers().filter(company=company)
        return Response(CustomerSerializer(customers, many=True).data)


class CustomerViewSet(EnvelopeMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    """
    ViewSet for Customer CRUD operations.

    list: Get all active customers
    create: Create a customer with packages
    retrieve: Get a specific customer
    update: Update a customer (packages replaced when given)
    destroy: Deactivate a customer
    by_driver: Active customers on a driver's route
    daily_food: Patch standing lunch/dinner bag formats
    bulk_update_daily_food: Patch standing food for many customers
    """

    serializer_class = CustomerSerializer
    lookup_value_regex = UUID_LOOKUP_REGEX
    deactivated_message = 'Customer deactivated successfully'

    def get_queryset(self):
        if self.action == 'list':
            return _active_customers()
        return (
            Customer.objects
            .select_related('driver', 'company')
            .prefetch_related('packages__category')
        )

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        packages = data.pop('packages')
        serializer.instance = create_customer(packages=packages, **data)

    def perform_update(self, serializer):
        data = dict(serializer.validated_data)
        packages = data.pop('packages', None)
        serializer.instance = update_customer(
            customer=serializer.instance,
            packages=packages,
            **data
        )

    @action(
        detail=False,
        methods=['get'],
        url_path=r'driver/(?P<driver_id>[0-9a-fA-F-]{36})',
        url_name='by-driver',
    )
    def by_driver(self, request, driver_id=None):
        """
        Get active customers for a driver.

        GET /api/customers/driver/{driver_id}/
        """
        driver = get_object_or_404(Driver, id=driver_id)
        customers = _active_customers().filter(driver=driver)
        return Response(CustomerSerializer(customers, many=True).data)

    @extend_schema(request=DailyFoodInputSerializer, responses={200: CustomerSerializer})
    @action(detail=True, methods=['patch'], url_path='daily-food', url_name='daily-food')
    def daily_food(self, request, pk=None):
        """
        Update a customer's standing lunch/dinner bag formats.

        PATCH /api/customers/{id}/daily-food/
        Body: {"lunch": "5,5+7", "dinner": "3"}
        """
        input_serializer = DailyFoodInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            customer = update_daily_food(
                customer_id=pk,
                lunch=input_serializer.validated_data.get('lunch'),
                dinner=input_serializer.validated_data.get('dinner'),
            )
        except CustomerNotFoundError as e:
            raise NotFound(str(e))

        return Response(CustomerSerializer(customer).data)

    @extend_schema(request=BulkDailyFoodInputSerializer)
    @action(
        detail=False,
        methods=['patch'],
        url_path='bulk-update-daily-food',
        url_name='bulk-update-daily-food',
    )
    def bulk_update_daily_food(self, request):
        """
        Update standing food for many customers in one transaction.

        PATCH /api/customers/bulk-update-daily-food/
        Body: {"updates": [{"customer": "<id>", "meal_type": "lunch", "bag_format": "4+1"}]}
        """
        input_serializer = BulkDailyFoodInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            updated = bulk_update_daily_food(
                updates=input_serializer.validated_data['updates']
            )
        except CustomerNotFoundError as e:
            raise ValidationError({'updates': [str(e)]})

        return success_response(
            data={'updated_customers': updated},
            message=f'Updated daily food for {updated} customer(s)',
        )
