"""Booking service tests: overlap setting, visibility and published events."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.test import TestCase, override_settings

from apps.bookings import services
from apps.bookings.domain.events import BookingRequested, BookingStatusChanged
from apps.bookings.exceptions import BookingConflict, IllegalTransition
from apps.bookings.models import Booking
from apps.properties.models import Property
from apps.users.models import User
from apps.users.tokens import ActingIdentity
from shared.application.message_bus import message_bus


class BookingServiceTests(TestCase):
    def setUp(self) -> None:
        self.student = User.objects.create_user(email="s@example.com", password="Pass12345", role=User.Role.STUDENT)
        self.owner = User.objects.create_user(email="o@example.com", password="Pass12345", role=User.Role.OWNER)
        self.property = Property.objects.create(
            owner=self.owner,
            title="Shared flat",
            address="3 Union Street",
            city="Springfield",
            monthly_rent=Decimal("300.00"),
        )
        self.start = date(2030, 9, 1)
        self.events: list = []

    def _capture(self, event_type) -> None:
        message_bus.register_event_handler(event_type, self.events.append)
        self.addCleanup(message_bus.unregister_event_handler, event_type, self.events.append)

    def test_overlap_rejected_by_default(self) -> None:
        services.create_booking(self.student.id, self.property.id, self.start, self.start + timedelta(days=5))

        with self.assertRaises(BookingConflict):
            services.create_booking(self.student.id, self.property.id, self.start, self.start + timedelta(days=1))

    @override_settings(BOOKINGS_PREVENT_OVERLAP=False)
    def test_overlap_allowed_when_disabled(self) -> None:
        services.create_booking(self.student.id, self.property.id, self.start, self.start + timedelta(days=5))
        services.create_booking(self.student.id, self.property.id, self.start, self.start + timedelta(days=5))

        self.assertEqual(Booking.objects.filter(property=self.property).count(), 2)

    def test_request_publishes_event_after_commit(self) -> None:
        self._capture(BookingRequested)

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            booking = services.create_booking(
                self.student.id, self.property.id, self.start, self.start + timedelta(days=2)
            )
            self.assertEqual(self.events, [])

        self.assertEqual(len(callbacks), 1)
        self.assertEqual(len(self.events), 1)
        event = self.events[0]
        self.assertEqual(event.booking_id, booking.id)
        self.assertEqual(event.student_id, self.student.id)
        self.assertEqual(event.to_dict()["event_type"], "BookingRequested")

    def test_rejected_transition_publishes_nothing(self) -> None:
        self._capture(BookingStatusChanged)
        booking = Booking.objects.create(
            student=self.student,
            property=self.property,
            date_from=self.start,
            date_to=self.start + timedelta(days=2),
            status=Booking.Status.CANCELLED,
        )

        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with self.assertRaises(IllegalTransition):
                services.transition_booking(booking.id, ActingIdentity(id=self.owner.id, role="owner"), "confirmed")

        self.assertEqual(callbacks, [])
        self.assertEqual(self.events, [])

    def test_transition_publishes_status_change(self) -> None:
        self._capture(BookingStatusChanged)
        booking = services.create_booking(self.student.id, self.property.id, self.start, self.start + timedelta(days=2))

        with self.captureOnCommitCallbacks(execute=True):
            services.transition_booking(booking.id, ActingIdentity(id=self.owner.id, role="owner"), "confirmed")

        self.assertEqual(len(self.events), 1)
        self.assertEqual(self.events[0].previous_status, "pending")
        self.assertEqual(self.events[0].status, "confirmed")
        self.assertEqual(self.events[0].actor_id, self.owner.id)

    def test_visibility(self) -> None:
        booking = services.create_booking(self.student.id, self.property.id, self.start, self.start + timedelta(days=2))
        stranger = ActingIdentity(id=self.owner.id + 100, role="student")

        self.assertEqual(list(services.bookings_visible_to(ActingIdentity(id=self.student.id, role="student"))), [booking])
        self.assertEqual(list(services.bookings_visible_to(ActingIdentity(id=self.owner.id, role="owner"))), [booking])
        self.assertEqual(list(services.bookings_visible_to(ActingIdentity(id=0, role="admin"))), [booking])
        self.assertEqual(list(services.bookings_visible_to(stranger)), [])
