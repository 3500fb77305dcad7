from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'payments'

router = SimpleRouter()
router.register(r'', views.PaymentViewSet, basename='payment')

urlpatterns = [
    # GET  /api/payments/   - List payments (?entity_type, ?entity_id)
    # POST /api/payments/   - Record payment
    path('', include(router.urls)),
]
