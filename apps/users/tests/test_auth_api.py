"""API tests for signup and login."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User
from apps.users.tokens import verify_token


class SignupAPITests(APITestCase):
    def _payload(self, **overrides) -> dict[str, str]:
        payload = {
            "email": "a@x.com",
            "username": "alice",
            "phone": "+15550001111",
            "password": "p1-Strong-Pass",
            "confirm_password": "p1-Strong-Pass",
            "role": "owner",
        }
        payload.update(overrides)
        return payload

    def test_password_mismatch_is_rejected(self) -> None:
        response = self.client.post(
            reverse("auth:signup"),
            self._payload(password="p1", confirm_password="p2"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "password_mismatch")
        self.assertFalse(User.objects.filter(email="a@x.com").exists())

    def test_signup_then_duplicate_email(self) -> None:
        response = self.client.post(reverse("auth:signup"), self._payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data, {"message": "User registered successfully."})

        user = User.objects.get(email="a@x.com")
        self.assertEqual(user.role, User.Role.OWNER)
        self.assertNotEqual(user.password, "p1-Strong-Pass")
        self.assertTrue(user.check_password("p1-Strong-Pass"))

        duplicate = self.client.post(reverse("auth:signup"), self._payload(username="other"), format="json")
        self.assertEqual(duplicate.status_code, status.HTTP_400_BAD_REQUEST, duplicate.data)
        self.assertEqual(duplicate.data["code"], "duplicate_email")
        self.assertEqual(User.objects.filter(email__iexact="a@x.com").count(), 1)

    def test_duplicate_email_is_case_insensitive(self) -> None:
        self.client.post(reverse("auth:signup"), self._payload(), format="json")

        response = self.client.post(reverse("auth:signup"), self._payload(email="A@X.COM"), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "duplicate_email")

    def test_role_defaults_to_student(self) -> None:
        payload = self._payload()
        payload.pop("role")

        response = self.client.post(reverse("auth:signup"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(User.objects.get(email="a@x.com").role, User.Role.STUDENT)

    def test_unknown_role_is_rejected(self) -> None:
        response = self.client.post(reverse("auth:signup"), self._payload(role="superuser"), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "invalid")
        self.assertIn("role", response.data["detail"])

    def test_signup_ignores_invalid_bearer_token(self) -> None:
        self.client.credentials(HTTP_AUTHORIZATION="Bearer garbage")

        response = self.client.post(reverse("auth:signup"), self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)


class LoginAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            email="owner@example.com",
            username="owner",
            phone="+15550002222",
            password="CorrectPassword1",
            role=User.Role.OWNER,
        )

    def test_login_returns_token_and_role(self) -> None:
        response = self.client.post(
            reverse("auth:login"),
            {"email": "owner@example.com", "password": "CorrectPassword1"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["role"], "owner")
        identity = verify_token(response.data["token"])
        self.assertEqual(identity.id, self.user.id)
        self.assertEqual(identity.role, "owner")

    def test_wrong_password_and_unknown_email_look_the_same(self) -> None:
        wrong_password = self.client.post(
            reverse("auth:login"),
            {"email": "owner@example.com", "password": "wrong"},
            format="json",
        )
        unknown_email = self.client.post(
            reverse("auth:login"),
            {"email": "nobody@example.com", "password": "CorrectPassword1"},
            format="json",
        )

        for response in (wrong_password, unknown_email):
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
            self.assertEqual(response.data["code"], "invalid_credentials")
        self.assertEqual(wrong_password.data, unknown_email.data)

    def test_inactive_user_cannot_login(self) -> None:
        self.user.is_active = False
        self.user.save(update_fields=["is_active"])

        response = self.client.post(
            reverse("auth:login"),
            {"email": "owner@example.com", "password": "CorrectPassword1"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "invalid_credentials")
