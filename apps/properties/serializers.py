"""Serializers for the properties domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Property


class PropertySerializer(serializers.ModelSerializer):
    """Property as returned to its owner."""

    owner_id = serializers.ReadOnlyField(source="owner.id")

    class Meta:
        model = Property
        fields = [
            "id",
            "owner_id",
            "title",
            "description",
            "property_type",
            "address",
            "city",
            "monthly_rent",
            "bedrooms",
            "is_available",
            "version",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PropertyWriteSerializer(serializers.ModelSerializer):
    """Create/update payload. The owner is never read from the payload."""

    version = serializers.IntegerField(required=False, min_value=1, write_only=True)

    class Meta:
        model = Property
        fields = [
            "title",
            "description",
            "property_type",
            "address",
            "city",
            "monthly_rent",
            "bedrooms",
            "is_available",
            "version",
        ]
        extra_kwargs = {
            "description": {"required": False, "allow_blank": True},
        }
