"""Resource ownership registry.

Every mutation looks the property up first (``PropertyNotFound``), then
compares its stored owner with the caller (``NotOwner``), and finally writes
conditionally on both the owner and the version it read, so a concurrent
change between the check and the write surfaces as ``StaleWrite`` instead of
being overwritten.

``owner_id`` arguments are always the authenticated identity's id; callers
must never pass an id taken from the request path or body.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from django.db import transaction  # type: ignore

from shared.domain.errors import StaleWrite
from shared.infrastructure.versioning import apply_versioned_update

from .exceptions import NotOwner, PropertyNotFound
from .models import Property

logger = logging.getLogger(__name__)

# Fields a client can never set through attributes or a patch.
PROTECTED_FIELDS = frozenset({"id", "pk", "owner", "owner_id", "version", "created_at", "updated_at"})


def _clean(attributes: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in attributes.items() if key not in PROTECTED_FIELDS}


def _get_owned(property_id: int, owner_id: int) -> Property:
    property_obj = Property.objects.filter(pk=property_id).first()
    if property_obj is None:
        raise PropertyNotFound()
    if property_obj.owner_id != owner_id:
        logger.warning(f"Identity {owner_id} refused access to property {property_id} of owner {property_obj.owner_id}")
        raise NotOwner()
    return property_obj


def list_owned(owner_id: int) -> list[Property]:
    """Properties of ``owner_id`` in creation order."""

    return list(Property.objects.filter(owner_id=owner_id).order_by("created_at", "id"))


def count_owned(owner_id: int) -> int:
    return Property.objects.filter(owner_id=owner_id).count()


def create_property(owner_id: int, attributes: Mapping[str, Any]) -> Property:
    property_obj = Property.objects.create(owner_id=owner_id, **_clean(attributes))
    logger.info(f"Property {property_obj.pk} created by owner {owner_id}")
    return property_obj


@transaction.atomic
def update_property(
    property_id: int,
    owner_id: int,
    patch: Mapping[str, Any],
    expected_version: int | None = None,
) -> Property:
    """Apply ``patch`` to a property owned by ``owner_id``.

    ``expected_version`` lets a client pin the version it last read; by
    default the version read here is used.
    """

    property_obj = _get_owned(property_id, owner_id)
    version = property_obj.version if expected_version is None else expected_version
    changes = _clean(patch)
    try:
        apply_versioned_update(property_obj, version, guard={"owner_id": owner_id}, **changes)
    except StaleWrite:
        logger.warning(f"Stale write on property {property_id} (expected version {version})")
        raise
    logger.info(f"Property {property_id} updated by owner {owner_id} to version {property_obj.version}")
    return property_obj


@transaction.atomic
def delete_property(property_id: int, owner_id: int) -> None:
    _get_owned(property_id, owner_id)
    deleted, _ = Property.objects.filter(pk=property_id, owner_id=owner_id).delete()
    if not deleted:
        raise PropertyNotFound()
    logger.info(f"Property {property_id} deleted by owner {owner_id}")
