"""Access control guard.

Two stateless decisions run before every protected operation:

* ``authenticate`` turns a bearer token into an ``ActingIdentity``;
* ``authorize`` checks the identity's role against the role an operation
  requires.

Roles do not form a hierarchy: an admin token does not pass an owner-only or
student-only check. Booking transitions, which admins may perform, decide
their actors separately (see ``apps.bookings.domain.transitions``).
"""

from __future__ import annotations

import logging

from rest_framework import permissions  # type: ignore

from .exceptions import MissingToken, NotSelf, RoleForbidden
from .models import CustomUser
from .tokens import ActingIdentity, verify_token

logger = logging.getLogger(__name__)

__all__ = [
    "ActingIdentity",
    "authenticate",
    "authorize",
    "ensure_self",
    "HasRole",
    "IsStudent",
    "IsOwner",
]


def authenticate(raw_token: str | None) -> ActingIdentity:
    if not raw_token:
        raise MissingToken()
    return verify_token(raw_token)


def authorize(identity: ActingIdentity, required_role: str) -> None:
    if identity.role != required_role:
        logger.warning(
            f"Identity {identity.id} with role {identity.role} refused; role {required_role} required"
        )
        raise RoleForbidden(f"This action requires the {required_role} role.")


def ensure_self(identity: ActingIdentity, owner_id: int) -> None:
    """Reject a path-declared owner id that is not the token subject."""
    if int(owner_id) != identity.id:
        logger.warning(f"Identity {identity.id} addressed resources of owner {owner_id}")
        raise NotSelf()


class HasRole(permissions.BasePermission):
    """Grants access to authenticated identities holding exactly ``required_role``."""

    required_role: str = ""

    def has_permission(self, request, view) -> bool:  # type: ignore
        identity = request.user
        if not getattr(identity, "is_authenticated", False):
            return False
        authorize(identity, self.required_role)
        return True


class IsStudent(HasRole):
    required_role = CustomUser.Role.STUDENT


class IsOwner(HasRole):
    required_role = CustomUser.Role.OWNER
