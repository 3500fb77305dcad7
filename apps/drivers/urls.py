from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'drivers'

router = SimpleRouter()
router.register(r'', views.DriverViewSet, basename='driver')

urlpatterns = [
    # GET    /api/drivers/          - List active drivers
    # POST   /api/drivers/          - Create driver
    # GET    /api/drivers/{id}/     - Get driver
    # PUT    /api/drivers/{id}/     - Update driver
    # DELETE /api/drivers/{id}/     - Deactivate driver
    path('', include(router.urls)),
]
