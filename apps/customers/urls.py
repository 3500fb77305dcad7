from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'customers'

router = SimpleRouter()
router.register(r'companies', views.CompanyViewSet, basename='company')
router.register(r'customers', views.CustomerViewSet, basename='customer')

urlpatterns = [
    # Company routes
    # GET    /api/companies/                 - List active companies
    # POST   /api/companies/                 - Create company
    # GET    /api/companies/{id}/            - Get company
    # PUT    /api/companies/{id}/            - Update company
    # DELETE /api/companies/{id}/            - Delete company (no customers)
    # GET    /api/companies/{id}/customers/  - Company's active customers

    # Customer routes
    # GET    /api/customers/                          - List active customers
    # POST   /api/customers/                          - Create customer
    # GET    /api/customers/{id}/                     - Get customer
    # PUT    /api/customers/{id}/                     - Update customer
    # DELETE /api/customers/{id}/                     - Deactivate customer
    # GET    /api/customers/driver/{driver_id}/       - Customers on a route
    # PATCH  /api/customers/{id}/daily-food/          - Standing lunch/dinner
    # PATCH  /api/customers/bulk-update-daily-food/   - Bulk standing food
    path('', include(router.urls)),
]
