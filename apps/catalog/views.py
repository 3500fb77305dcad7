from rest_framework import viewsets
from config.envelope import EnvelopeMixin, UUID_LOOKUP_REGEX
from config.mixins import SoftDeleteMixin
from .models import FoodCategory
from .serializers import FoodCategorySerializer


class FoodCategoryViewSet(EnvelopeMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    """
    ViewSet for FoodCategory CRUD operations.

    Deleting a category deactivates it so historical orders and bills keep
    their category reference.
    """

    serializer_class = FoodCategorySerializer
    lookup_value_regex = UUID_LOOKUP_REGEX
    deactivated_message = 'Food category deactivated successfully'

    def get_queryset(self):
        if self.action == 'list':
            return FoodCategory.objects.filter(is_active=True).order_by('name')
        return FoodCategory.objects.all()
