from django.db import models
import uuid


class FoodCategory(models.Model):
    """Meal package category a customer subscribes to (e.g. 'Standard Thali')."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=50, unique=True)
    description = models.CharField(max_length=200, blank=True)
    is_active = models.BooleanField(default=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'food_categories'
        verbose_name_plural = 'food categories'
        ordering = ['name']

    def __str__(self):
        return self.name
