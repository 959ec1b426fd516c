"""Owner-scoped property API views.

Every route is addressed by the owner's id in the path. The path id must be
the caller's own id (``NotSelf``), and the registry then checks the stored
owner of the property again (``NotOwner``).
"""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.access import IsOwner, ensure_self

from . import services
from .serializers import PropertySerializer, PropertyWriteSerializer


class OwnerPropertyListView(APIView):
    """List and create the caller's properties."""

    permission_classes = [IsOwner]
    serializer_class = PropertyWriteSerializer

    def get(self, request, owner_id: int):  # type: ignore
        ensure_self(request.user, owner_id)
        properties = services.list_owned(request.user.id)
        return Response(PropertySerializer(properties, many=True).data)

    def post(self, request, owner_id: int):  # type: ignore
        ensure_self(request.user, owner_id)
        serializer = PropertyWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        attributes = dict(serializer.validated_data)
        attributes.pop("version", None)
        property_obj = services.create_property(request.user.id, attributes)
        return Response(PropertySerializer(property_obj).data, status=status.HTTP_201_CREATED)


class OwnerPropertyDetailView(APIView):
    """Update or delete one of the caller's properties."""

    permission_classes = [IsOwner]
    serializer_class = PropertyWriteSerializer

    def put(self, request, owner_id: int, property_id: int):  # type: ignore
        return self._update(request, owner_id, property_id, partial=False)

    def patch(self, request, owner_id: int, property_id: int):  # type: ignore
        return self._update(request, owner_id, property_id, partial=True)

    def delete(self, request, owner_id: int, property_id: int):  # type: ignore
        ensure_self(request.user, owner_id)
        services.delete_property(property_id, request.user.id)
        return Response({"message": "Property deleted successfully."}, status=status.HTTP_200_OK)

    def _update(self, request, owner_id: int, property_id: int, *, partial: bool):
        ensure_self(request.user, owner_id)
        serializer = PropertyWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        patch = dict(serializer.validated_data)
        expected_version = patch.pop("version", None)
        property_obj = services.update_property(
            property_id,
            request.user.id,
            patch,
            expected_version=expected_version,
        )
        return Response(PropertySerializer(property_obj).data)


class OwnerPropertyCountView(APIView):
    """Number of properties the caller owns."""

    permission_classes = [IsOwner]

    def get(self, request):  # type: ignore
        return Response({"count": services.count_owned(request.user.id)})
