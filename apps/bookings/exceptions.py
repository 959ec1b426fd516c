"""Booking lifecycle errors."""

from __future__ import annotations

from shared.domain.errors import Conflict, Forbidden, NotFound, ValidationFailed


class BookingNotFound(NotFound):
    code = "not_found"
    default_message = "Booking not found."


class InvalidRange(ValidationFailed):
    code = "invalid_range"
    default_message = "date_from must be earlier than date_to."


class IllegalTransition(Conflict):
    code = "illegal_transition"
    default_message = "This status change is not allowed."


class TransitionForbidden(Forbidden):
    code = "forbidden"
    default_message = "You are not allowed to change the status of this booking."


class BookingConflict(Conflict):
    code = "booking_conflict"
    default_message = "The property is already booked for the requested dates."
