from rest_framework import serializers
from .models import FoodCategory


class FoodCategorySerializer(serializers.ModelSerializer):
    """Serializer for food categories (name uniqueness enforced by the model)."""

    class Meta:
        model = FoodCategory
        fields = [
            'id',
            'name',
            'description',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
