from rest_framework import viewsets
from config.envelope import EnvelopeMixin, UUID_LOOKUP_REGEX
from config.mixins import SoftDeleteMixin
from .models import Driver
from .serializers import DriverSerializer


class DriverViewSet(EnvelopeMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    """
    ViewSet for Driver CRUD operations.

    list: Get all active drivers
    create: Create a new driver
    retrieve: Get a specific driver
    update: Update a driver
    destroy: Deactivate a driver
    """

    serializer_class = DriverSerializer
    lookup_value_regex = UUID_LOOKUP_REGEX
    deactivated_message = 'Driver deactivated successfully'

    def get_queryset(self):
        """Only active drivers are listed; any driver can be fetched by id."""
        if self.action == 'list':
            return Driver.objects.filter(is_active=True).order_by('name')
        return Driver.objects.all()
