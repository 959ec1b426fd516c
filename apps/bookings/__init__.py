"""Bookings app package.

This app encapsulates the booking domain: the booking model, the status
state machine and the services that create bookings and move them through
their lifecycle. Transitions are applied with conditional, versioned writes
so concurrent requests cannot both pass a legality check on a stale read.
"""
