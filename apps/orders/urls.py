from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'orders'

router = SimpleRouter()
router.register(r'', views.DailyOrderViewSet, basename='daily-order')

urlpatterns = [
    # GET   /api/daily-orders/                         - List (?date=, ?driver=)
    # GET   /api/daily-orders/summary/                 - Totals (?start_date=, ?end_date=)
    # POST  /api/daily-orders/generate/                - Generate orders for a date
    # GET   /api/daily-orders/{id}/                    - Order with items
    # PUT   /api/daily-orders/{id}/items/{item_id}/    - Update item bag format
    # PATCH /api/daily-orders/{id}/status/             - Update status
    path('', include(router.urls)),
]
