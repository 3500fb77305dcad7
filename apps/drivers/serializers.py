from rest_framework import serializers
from .models import Driver


class DriverSerializer(serializers.ModelSerializer):
    """Serializer for drivers."""

    name = serializers.CharField(max_length=100, trim_whitespace=True)
    route = serializers.CharField(max_length=200, trim_whitespace=True)

    class Meta:
        model = Driver
        fields = [
            'id',
            'name',
            'phone',
            'email',
            'route',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class DriverMinimalSerializer(serializers.ModelSerializer):
    """Minimal driver info for nested serialization."""

    class Meta:
        model = Driver
        fields = ['id', 'name', 'route']
        read_only_fields = fields
