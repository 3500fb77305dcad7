from django.db import models
import uuid


class Driver(models.Model):
    """Delivery driver and the route they cover."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    phone = models.CharField(max_length=15, blank=True)
    email = models.EmailField(blank=True)
    route = models.CharField(max_length=200)
    is_active = models.BooleanField(default=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'drivers'
        indexes = [
            models.Index(fields=['is_active'], name='drivers_active_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.route})"
