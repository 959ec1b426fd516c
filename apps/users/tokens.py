"""Token service: issues and verifies signed, time-bound identity tokens.

Tokens are SimpleJWT access tokens signed with ``settings.JWT_SECRET``. Besides
the standard claims (``user_id``, ``exp``, ``iat``, ``jti``, ``token_type``)
they carry the identity's ``role``. Verification is pure: the signature,
expiry and payload shape are checked, the user table is not consulted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rest_framework_simplejwt.exceptions import TokenError  # type: ignore
from rest_framework_simplejwt.settings import api_settings  # type: ignore
from rest_framework_simplejwt.tokens import AccessToken  # type: ignore

from .exceptions import InvalidToken
from .models import CustomUser

ROLE_CLAIM = "role"


@dataclass(frozen=True)
class ActingIdentity:
    """The authenticated caller as asserted by a verified token."""

    id: int
    role: str

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    @property
    def pk(self) -> int:
        return self.id


def issue_token(user, issued_at: datetime | None = None) -> str:
    """Return a bearer token for ``user`` valid for ``ACCESS_TOKEN_LIFETIME``.

    ``issued_at`` overrides the clock (an aware datetime); expiry is computed
    from it.
    """

    token = AccessToken.for_user(user)
    if issued_at is not None:
        token.set_iat(at_time=issued_at)
        token.set_exp(from_time=issued_at, lifetime=api_settings.ACCESS_TOKEN_LIFETIME)
    token[ROLE_CLAIM] = user.role
    return str(token)


def verify_token(raw_token: str) -> ActingIdentity:
    """Decode ``raw_token`` into the acting identity or raise ``InvalidToken``."""

    try:
        token = AccessToken(raw_token)
    except TokenError as exc:
        raise InvalidToken() from exc

    subject = token.get(api_settings.USER_ID_CLAIM)
    role = token.get(ROLE_CLAIM)
    if subject is None or role not in CustomUser.Role.values:
        raise InvalidToken("Token payload is malformed.")
    try:
        subject = int(subject)
    except (TypeError, ValueError) as exc:
        raise InvalidToken("Token payload is malformed.") from exc
    return ActingIdentity(id=subject, role=role)
