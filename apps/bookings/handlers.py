"""Event handlers for the booking domain.

Notification delivery is not part of this service; these handlers record
what happened so an external notifier can be attached at the same seam.
"""

from __future__ import annotations

import logging

from shared.application.message_bus import MessageBus

from .domain.events import BookingRequested, BookingStatusChanged

logger = logging.getLogger(__name__)


def log_booking_event(event) -> None:
    logger.info(f"Booking event {type(event).__name__}: {event.to_dict()}")


def register_handlers(bus: MessageBus) -> None:
    bus.register_event_handler(BookingRequested, log_booking_event)
    bus.register_event_handler(BookingStatusChanged, log_booking_event)
