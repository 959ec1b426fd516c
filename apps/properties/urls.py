"""URL routing for owner-scoped property management (namespace: properties)."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import OwnerPropertyCountView, OwnerPropertyDetailView, OwnerPropertyListView

app_name = "properties"

urlpatterns = [
    path("properties/count/", OwnerPropertyCountView.as_view(), name="owned-count"),
    path("<int:owner_id>/properties/", OwnerPropertyListView.as_view(), name="owned-list"),
    path(
        "<int:owner_id>/properties/<int:property_id>/",
        OwnerPropertyDetailView.as_view(),
        name="owned-detail",
    ),
]
