"""Identity and access errors."""

from __future__ import annotations

from shared.domain.errors import Forbidden, Unauthenticated, ValidationFailed


class PasswordMismatch(ValidationFailed):
    code = "password_mismatch"
    default_message = "Passwords do not match."


class DuplicateEmail(ValidationFailed):
    code = "duplicate_email"
    default_message = "Email already registered."


class InvalidCredentials(ValidationFailed):
    code = "invalid_credentials"
    default_message = "Invalid credentials."


class MissingToken(Unauthenticated):
    code = "missing_token"
    default_message = "Authentication credentials were not provided."


class InvalidToken(Unauthenticated):
    code = "invalid_token"
    default_message = "Token is invalid or expired."


class RoleForbidden(Forbidden):
    code = "forbidden"
    default_message = "Your role is not allowed to perform this action."


class NotSelf(Forbidden):
    code = "not_self"
    default_message = "You can only manage your own account's resources."
