"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from datetime import date

from shared.domain.base import DomainEvent


@dataclass
class BookingRequested(DomainEvent):
    """
    Event: A student requested a booking (-> PENDING)

    Triggers:
    - Notify the property owner
    """
    booking_id: int
    property_id: int
    student_id: int
    date_from: date
    date_to: date


@dataclass
class BookingStatusChanged(DomainEvent):
    """
    Event: A booking left PENDING (-> CONFIRMED or CANCELLED)

    Triggers:
    - Notify the student and the property owner
    """
    booking_id: int
    property_id: int
    student_id: int
    previous_status: str
    status: str
    actor_id: int
