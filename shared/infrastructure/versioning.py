"""Optimistic concurrency primitives for ORM aggregates.

Rows that can be mutated concurrently carry a ``version`` counter. A write is
only applied when the row still holds the version (and any other guard
columns) the caller decided on, so a read-decide-write cycle cannot silently
overwrite a concurrent change.
"""

from __future__ import annotations

from typing import Any

from django.db import models, transaction  # type: ignore
from django.db.models import F  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.errors import StaleWrite


class VersionedModel(models.Model):
    """Abstract base adding a monotonically increasing row version."""

    version = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


def lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def conditional_update(queryset, expected_version: int, **changes: Any) -> int:
    """Write ``changes`` to rows still at ``expected_version``, bumping the version.

    ``queryset`` narrows the target (primary key plus guard columns such as the
    owner or the current status). Returns the number of rows written.
    """

    changes.setdefault("updated_at", timezone.now())
    return queryset.filter(version=expected_version).update(
        version=F("version") + 1,
        **changes,
    )


def apply_versioned_update(instance: VersionedModel, expected_version: int, guard: dict[str, Any] | None = None, **changes: Any):
    """Conditionally update ``instance`` and refresh it, or raise ``StaleWrite``."""

    model = type(instance)
    queryset = model.objects.filter(pk=instance.pk, **(guard or {}))
    if not conditional_update(queryset, expected_version, **changes):
        raise StaleWrite()
    instance.refresh_from_db()
    return instance
