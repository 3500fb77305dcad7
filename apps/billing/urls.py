from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'billing'

router = SimpleRouter()
router.register(r'', views.BillViewSet, basename='bill')

urlpatterns = [
    # GET  /api/billing/                   - List bills (?entity_type, ?entity_id, ?year, ?month, ?status)
    # POST /api/billing/generate/          - Generate all bills for a month
    # POST /api/billing/generate/entity/   - Generate one entity's bill
    # GET  /api/billing/ledger/            - Ledger (?entity_type, ?entity_id)
    # GET  /api/billing/{id}/              - Bill with items
    path('', include(router.urls)),
]
