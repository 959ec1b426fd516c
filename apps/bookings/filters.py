"""FilterSet definitions for booking listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    property = django_filters.NumberFilter(field_name="property_id", lookup_expr="exact")
    date_from_after = django_filters.DateFilter(field_name="date_from", lookup_expr="gte")
    date_to_before = django_filters.DateFilter(field_name="date_to", lookup_expr="lte")

    class Meta:
        model = Booking
        fields = ["status", "property"]
