"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Booking request by a student. Date ordering is checked by the service."""

    property_id = serializers.IntegerField(min_value=1)
    date_from = serializers.DateField()
    date_to = serializers.DateField()


class BookingTransitionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.Status.choices)
    version = serializers.IntegerField(required=False, min_value=1)


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking representation."""

    student_id = serializers.ReadOnlyField(source="student.id")
    property_id = serializers.ReadOnlyField(source="property.id")

    class Meta:
        model = Booking
        fields = [
            "id",
            "student_id",
            "property_id",
            "date_from",
            "date_to",
            "status",
            "version",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
