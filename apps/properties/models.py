"""Property domain models for StudentNest.

A property is a housing unit an owner lists for students. Only its owner may
change or remove it; deletion is immediate and cascades to its bookings.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.infrastructure.versioning import VersionedModel


class Property(VersionedModel):
    """Housing unit listed by an owner."""

    class PropertyType(models.TextChoices):
        APARTMENT = "apartment", _("Apartment")
        STUDIO = "studio", _("Studio")
        SHARED_ROOM = "shared_room", _("Shared room")
        PRIVATE_ROOM = "private_room", _("Private room")
        HOUSE = "house", _("House")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="properties",
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    property_type = models.CharField(
        max_length=20,
        choices=PropertyType.choices,
        default=PropertyType.APARTMENT,
    )
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    monthly_rent = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    bedrooms = models.PositiveSmallIntegerField(default=1)
    is_available = models.BooleanField(default=True)

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["owner", "created_at"], name="property_owner_created_idx"),
        ]

    def __str__(self) -> str:
        return self.title
