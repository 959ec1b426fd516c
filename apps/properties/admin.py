"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "owner",
        "city",
        "property_type",
        "monthly_rent",
        "bedrooms",
        "is_available",
        "created_at",
    )
    list_filter = ("property_type", "city", "is_available")
    search_fields = ("title", "address", "city", "owner__email")
    readonly_fields = ("version", "created_at", "updated_at")
