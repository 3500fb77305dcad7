from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'catalog'

router = SimpleRouter()
router.register(r'', views.FoodCategoryViewSet, basename='food-category')

urlpatterns = [
    # GET    /api/food-categories/        - List active categories
    # POST   /api/food-categories/        - Create category
    # GET    /api/food-categories/{id}/   - Get category
    # PUT    /api/food-categories/{id}/   - Update category
    # DELETE /api/food-categories/{id}/   - Deactivate category
    path('', include(router.urls)),
]
