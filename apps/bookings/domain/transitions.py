"""
Booking Status Finite State Machine

State transitions:
- PENDING -> CONFIRMED (property owner or admin)
- PENDING -> CANCELLED (booking student, property owner or admin)

CONFIRMED and CANCELLED are terminal. Leaving a terminal state, or
"moving" to the status a booking already holds, is an illegal transition
rather than a no-op, so a retried confirm surfaces as an error.
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet

from apps.bookings.exceptions import IllegalTransition, TransitionForbidden
from apps.bookings.models import Booking
from apps.users.models import CustomUser

Status = Booking.Status


class Party(str, Enum):
    """How an acting identity relates to a booking."""

    STUDENT = "student"   # the student who requested it
    OWNER = "owner"       # the owner of the booked property
    ADMIN = "admin"


TERMINAL_STATES: FrozenSet[str] = frozenset({Status.CONFIRMED.value, Status.CANCELLED.value})

ALLOWED_TRANSITIONS: dict[tuple[str, str], FrozenSet[Party]] = {
    (Status.PENDING.value, Status.CONFIRMED.value): frozenset({Party.OWNER, Party.ADMIN}),
    (Status.PENDING.value, Status.CANCELLED.value): frozenset({Party.STUDENT, Party.OWNER, Party.ADMIN}),
}


def parties_for(actor_id: int, actor_role: str, student_id: int, owner_id: int) -> FrozenSet[Party]:
    parties = set()
    if actor_id == student_id:
        parties.add(Party.STUDENT)
    if actor_id == owner_id:
        parties.add(Party.OWNER)
    if actor_role == CustomUser.Role.ADMIN:
        parties.add(Party.ADMIN)
    return frozenset(parties)


def check_transition(current: str, target: str, parties: FrozenSet[Party]) -> None:
    """Raise unless ``parties`` may move a booking from ``current`` to ``target``.

    An actor unrelated to the booking is refused before anything about its
    state is revealed.
    """
    if not parties:
        raise TransitionForbidden()
    if str(current) in TERMINAL_STATES:
        raise IllegalTransition(f"Booking is already {current}; no further changes are allowed.")
    if current == target:
        raise IllegalTransition(f"Booking is already {current}.")
    allowed = ALLOWED_TRANSITIONS.get((str(current), str(target)))
    if allowed is None:
        raise IllegalTransition(f"Cannot move a booking from {current} to {target}.")
    if not parties & allowed:
        raise TransitionForbidden(f"You are not allowed to move this booking to {target}.")
