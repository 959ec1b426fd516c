"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore

from apps.properties.exceptions import PropertyNotFound
from apps.properties.models import Property
from apps.users.models import CustomUser
from apps.users.tokens import ActingIdentity
from shared.application.message_bus import message_bus
from shared.domain.errors import StaleWrite
from shared.infrastructure.versioning import apply_versioned_update, lock_queryset_if_possible

from .domain.events import BookingRequested, BookingStatusChanged
from .domain.transitions import check_transition, parties_for
from .exceptions import BookingConflict, BookingNotFound, InvalidRange
from .models import Booking

logger = logging.getLogger(__name__)

BLOCKING_STATUSES: Iterable[str] = (
    Booking.Status.PENDING,
    Booking.Status.CONFIRMED,
)


def ensure_property_is_available(property_obj: Property, date_from: date, date_to: date) -> None:
    """Raise ``BookingConflict`` if an active booking overlaps ``[date_from, date_to)``.

    Back-to-back stays (one ending on the day the next starts) do not overlap.
    """

    overlapping_filter = Q(date_from__lt=date_to) & Q(date_to__gt=date_from)
    bookings_qs = Booking.objects.filter(
        property=property_obj,
        status__in=BLOCKING_STATUSES,
    ).filter(overlapping_filter)

    if lock_queryset_if_possible(bookings_qs).exists():
        raise BookingConflict()


def create_booking(student_id: int, property_id: int, date_from: date, date_to: date) -> Booking:
    """Create a pending booking of ``property_id`` for ``student_id``."""

    if date_from >= date_to:
        raise InvalidRange()

    with transaction.atomic():
        # Serializes concurrent requests for the same property.
        property_obj = lock_queryset_if_possible(Property.objects.filter(pk=property_id)).first()
        if property_obj is None:
            raise PropertyNotFound()

        if settings.BOOKINGS_PREVENT_OVERLAP:
            try:
                ensure_property_is_available(property_obj, date_from, date_to)
            except BookingConflict:
                logger.info(f"Booking of property {property_id} {date_from}..{date_to} rejected: overlap")
                raise

        booking = Booking.objects.create(
            student_id=student_id,
            property=property_obj,
            date_from=date_from,
            date_to=date_to,
        )
        message_bus.publish_on_commit(
            BookingRequested(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                property_id=property_obj.pk,
                student_id=student_id,
                date_from=date_from,
                date_to=date_to,
            )
        )

    logger.info(f"Booking {booking.pk} requested by student {student_id} for property {property_id}")
    return booking


def transition_booking(
    booking_id: int,
    actor: ActingIdentity,
    target_status: str,
    expected_version: int | None = None,
) -> Booking:
    """Move a booking to ``target_status`` on behalf of ``actor``.

    The legality check and the write happen against the same row version:
    the update only applies if the booking still has the status and version
    that were checked, otherwise ``StaleWrite`` is raised.
    """

    with transaction.atomic():
        booking = Booking.objects.select_related("property").filter(pk=booking_id).first()
        if booking is None:
            raise BookingNotFound()

        parties = parties_for(actor.id, actor.role, booking.student_id, booking.property.owner_id)
        check_transition(booking.status, target_status, parties)

        previous_status = booking.status
        version = booking.version if expected_version is None else expected_version
        try:
            apply_versioned_update(
                booking,
                version,
                guard={"status": previous_status},
                status=target_status,
            )
        except StaleWrite:
            logger.warning(f"Stale write on booking {booking_id} (expected version {version})")
            raise

        message_bus.publish_on_commit(
            BookingStatusChanged(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                property_id=booking.property_id,
                student_id=booking.student_id,
                previous_status=previous_status,
                status=booking.status,
                actor_id=actor.id,
            )
        )

    logger.info(f"Booking {booking_id} moved {previous_status} -> {booking.status} by identity {actor.id}")
    return booking


def bookings_visible_to(actor: ActingIdentity):
    """Bookings an identity may read: its own, those on its properties, or all for admins."""

    qs = Booking.objects.select_related("property")
    if actor.role == CustomUser.Role.ADMIN:
        return qs
    if actor.role == CustomUser.Role.OWNER:
        return qs.filter(property__owner_id=actor.id)
    return qs.filter(student_id=actor.id)
