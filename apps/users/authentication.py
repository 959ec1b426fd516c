"""DRF authentication backed by the token service."""

from __future__ import annotations

from rest_framework import authentication, exceptions  # type: ignore

from .access import authenticate
from .exceptions import InvalidToken, MissingToken


class BearerTokenAuthentication(authentication.BaseAuthentication):
    """Reads ``Authorization: Bearer <token>`` and resolves the acting identity.

    Requests without the header stay anonymous so that permission classes
    answer with ``not_authenticated``; a present but unusable token fails
    immediately. Both outcomes are 401 responses.
    """

    keyword = "Bearer"
    www_authenticate_realm = "api"

    def authenticate(self, request):  # type: ignore
        header = authentication.get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None

        if len(header) != 2:
            raise exceptions.AuthenticationFailed(
                "Invalid Authorization header. Expected 'Bearer <token>'.",
                code=InvalidToken.code,
            )

        try:
            raw_token = header[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed(InvalidToken.default_message, code=InvalidToken.code)

        try:
            identity = authenticate(raw_token)
        except (InvalidToken, MissingToken) as exc:
            raise exceptions.AuthenticationFailed(exc.message, code=exc.code) from exc
        return identity, raw_token

    def authenticate_header(self, request) -> str:  # type: ignore
        return f'{self.keyword} realm="{self.www_authenticate_realm}"'
