"""Ownership registry errors."""

from __future__ import annotations

from shared.domain.errors import Forbidden, NotFound


class PropertyNotFound(NotFound):
    code = "not_found"
    default_message = "Property not found."


class NotOwner(Forbidden):
    code = "not_owner"
    default_message = "This property does not belong to you."
