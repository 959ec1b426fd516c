"""API exception handler tests."""

from __future__ import annotations

from django.core.exceptions import PermissionDenied
from django.db import DatabaseError
from django.http import Http404
from django.test import SimpleTestCase
from rest_framework import exceptions, status

from shared.domain.errors import Conflict
from shared.infrastructure.exception_handler import api_exception_handler


class ApiExceptionHandlerTests(SimpleTestCase):
    def _handle(self, exc):
        return api_exception_handler(exc, {"view": None})

    def test_django_http404_keeps_not_found_code(self) -> None:
        response = self._handle(Http404())

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "not_found")

    def test_django_permission_denied_keeps_its_code(self) -> None:
        response = self._handle(PermissionDenied())

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "permission_denied")

    def test_drf_error_with_custom_code(self) -> None:
        response = self._handle(exceptions.AuthenticationFailed("Bad token.", code="invalid_token"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {"code": "invalid_token", "detail": "Bad token."})

    def test_field_errors_are_invalid(self) -> None:
        response = self._handle(exceptions.ValidationError({"email": ["This field is required."]}))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid")
        self.assertIn("email", response.data["detail"])

    def test_domain_error(self) -> None:
        response = self._handle(Conflict())

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], Conflict.code)

    def test_database_error_hides_detail(self) -> None:
        with self.assertLogs("shared.infrastructure.exception_handler", level="ERROR"):
            response = self._handle(DatabaseError("connection refused"))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {"code": "internal", "detail": "Server error."})
