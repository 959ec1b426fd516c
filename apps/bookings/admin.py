"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "property",
        "student",
        "status",
        "date_from",
        "date_to",
        "created_at",
    )
    list_filter = ("status", "date_from", "date_to")
    search_fields = ("property__title", "student__email")
    readonly_fields = ("status", "version", "created_at", "updated_at")
