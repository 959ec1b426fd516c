"""Credential store: identity creation and password verification."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore

from .exceptions import DuplicateEmail, InvalidCredentials

logger = logging.getLogger(__name__)

User = get_user_model()


def find_by_email(email: str):
    """Return the identity registered under ``email`` (case-insensitive) or None."""

    return User.objects.filter(email__iexact=User.objects.normalize_email(email)).first()


def create_identity(email: str, username: str, phone: str, raw_password: str, role: str):
    """Register a new identity, storing only a salted hash of the password.

    Raises ``DuplicateEmail`` when the email is taken, including when a
    concurrent signup wins the race between the lookup and the insert.
    """

    try:
        with transaction.atomic():
            if find_by_email(email) is not None:
                raise DuplicateEmail()
            user = User.objects.create_user(
                email=email,
                password=raw_password,
                username=username,
                phone=phone,
                role=role,
            )
    except IntegrityError as exc:
        logger.warning(f"Signup rejected for duplicate email: {exc}")
        raise DuplicateEmail() from exc
    logger.info(f"Identity {user.pk} registered with role {user.role}")
    return user


def verify_credentials(email: str, password: str):
    """Return the identity for a correct email/password pair.

    Any mismatch raises ``InvalidCredentials`` without revealing which part
    was wrong.
    """

    user = find_by_email(email)
    if user is None:
        # Run the hasher once anyway so unknown emails take as long as wrong passwords.
        User().set_password(password)
        raise InvalidCredentials()
    if not user.is_active or not user.check_password(password):
        raise InvalidCredentials()
    return user
