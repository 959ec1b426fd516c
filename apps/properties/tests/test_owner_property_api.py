"""API tests for owner-scoped property management."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.properties.models import Property
from apps.users.models import User
from apps.users.tokens import issue_token


class OwnerPropertyAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(
            email="owner@example.com",
            username="owner",
            password="OwnerPass123",
            role=User.Role.OWNER,
        )
        self.rival = User.objects.create_user(
            email="rival@example.com",
            username="rival",
            password="RivalPass123",
            role=User.Role.OWNER,
        )
        self.property = Property.objects.create(
            owner=self.owner,
            title="Studio by the library",
            address="5 Library Lane",
            city="Springfield",
            property_type=Property.PropertyType.STUDIO,
            monthly_rent=Decimal("600.00"),
        )
        self._login(self.owner)

    def _login(self, user: User) -> None:
        token = issue_token(user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    def _list_url(self, owner: User) -> str:
        return reverse("properties:owned-list", args=[owner.id])

    def _detail_url(self, owner: User, property_id: int) -> str:
        return reverse("properties:owned-detail", args=[owner.id, property_id])

    def _payload(self, **overrides) -> dict:
        payload = {
            "title": "Two-bedroom flat",
            "address": "12 Campus Street",
            "city": "Springfield",
            "property_type": "apartment",
            "monthly_rent": "950.00",
            "bedrooms": 2,
        }
        payload.update(overrides)
        return payload

    def test_list_own_properties(self) -> None:
        Property.objects.create(
            owner=self.rival,
            title="Not listed here",
            address="1 Elsewhere",
            city="Shelbyville",
            monthly_rent=Decimal("300.00"),
        )

        response = self.client.get(self._list_url(self.owner))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([item["id"] for item in response.data], [self.property.id])
        self.assertEqual(response.data[0]["owner_id"], self.owner.id)

    def test_create_ignores_owner_in_body(self) -> None:
        response = self.client.post(
            self._list_url(self.owner),
            self._payload(owner_id=self.rival.id, owner=self.rival.id),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["owner_id"], self.owner.id)
        self.assertEqual(response.data["version"], 1)
        self.assertTrue(Property.objects.filter(pk=response.data["id"], owner=self.owner).exists())

    def test_create_validates_payload(self) -> None:
        response = self.client.post(self._list_url(self.owner), {"title": "Missing fields"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "invalid")
        self.assertIn("monthly_rent", response.data["detail"])

    def test_path_owner_must_be_caller(self) -> None:
        responses = [
            self.client.get(self._list_url(self.rival)),
            self.client.post(self._list_url(self.rival), self._payload(), format="json"),
            self.client.patch(self._detail_url(self.rival, self.property.id), {"title": "x"}, format="json"),
            self.client.delete(self._detail_url(self.rival, self.property.id)),
        ]

        for response in responses:
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
            self.assertEqual(response.data["code"], "not_self")
        self.assertEqual(Property.objects.filter(owner=self.rival).count(), 0)

    def test_other_owner_cannot_modify_property(self) -> None:
        self._login(self.rival)

        patch = self.client.patch(
            self._detail_url(self.rival, self.property.id),
            {"title": "Hijacked"},
            format="json",
        )
        delete = self.client.delete(self._detail_url(self.rival, self.property.id))

        for response in (patch, delete):
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
            self.assertEqual(response.data["code"], "not_owner")
        self.property.refresh_from_db()
        self.assertEqual(self.property.title, "Studio by the library")

    def test_unknown_property_is_404(self) -> None:
        response = self.client.patch(self._detail_url(self.owner, 999_999), {"title": "x"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["code"], "not_found")

    def test_put_replaces_and_patch_updates(self) -> None:
        put = self.client.put(self._detail_url(self.owner, self.property.id), self._payload(), format="json")

        self.assertEqual(put.status_code, status.HTTP_200_OK, put.data)
        self.assertEqual(put.data["title"], "Two-bedroom flat")
        self.assertEqual(put.data["version"], 2)

        patch = self.client.patch(
            self._detail_url(self.owner, self.property.id),
            {"monthly_rent": "1000.00"},
            format="json",
        )

        self.assertEqual(patch.status_code, status.HTTP_200_OK, patch.data)
        self.assertEqual(patch.data["monthly_rent"], "1000.00")
        self.assertEqual(patch.data["title"], "Two-bedroom flat")
        self.assertEqual(patch.data["version"], 3)

    def test_stale_version_is_409(self) -> None:
        self.client.patch(self._detail_url(self.owner, self.property.id), {"title": "First"}, format="json")

        response = self.client.patch(
            self._detail_url(self.owner, self.property.id),
            {"title": "Second", "version": 1},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "stale_write")
        self.property.refresh_from_db()
        self.assertEqual(self.property.title, "First")

    def test_delete(self) -> None:
        response = self.client.delete(self._detail_url(self.owner, self.property.id))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data, {"message": "Property deleted successfully."})
        self.assertFalse(Property.objects.filter(pk=self.property.id).exists())

    def test_count(self) -> None:
        self.client.post(self._list_url(self.owner), self._payload(), format="json")

        response = self.client.get(reverse("properties:owned-count"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data, {"count": 2})

    def test_student_cannot_manage_properties(self) -> None:
        student = User.objects.create_user(
            email="student@example.com",
            username="student",
            password="StudentPass123",
            role=User.Role.STUDENT,
        )
        self._login(student)

        response = self.client.get(self._list_url(student))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)
        self.assertEqual(response.data["code"], "forbidden")
