"""
Domain Error Taxonomy

Every failure the core can surface derives from ``DomainError``. Each class
carries a stable machine ``code``, the HTTP-equivalent ``status_code`` the API
layer answers with, and a default human-readable message.

- ValidationFailed (400): malformed input, never retried
- Unauthenticated (401): missing, invalid or expired credentials
- Forbidden (403): role mismatch or non-ownership
- NotFound (404)
- Conflict (409): illegal state transitions and lost concurrent writes
"""


class DomainError(Exception):
    code = "error"
    status_code = 400
    default_message = "Request failed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(DomainError):
    code = "validation_failed"
    status_code = 400
    default_message = "Invalid input."


class Unauthenticated(DomainError):
    code = "unauthenticated"
    status_code = 401
    default_message = "Authentication credentials were not provided or are invalid."


class Forbidden(DomainError):
    code = "forbidden"
    status_code = 403
    default_message = "You do not have permission to perform this action."


class NotFound(DomainError):
    code = "not_found"
    status_code = 404
    default_message = "Not found."


class Conflict(DomainError):
    code = "conflict"
    status_code = 409
    default_message = "The request conflicts with the current state of the resource."


class StaleWrite(Conflict):
    """A conditional write lost against a concurrent update; re-read and retry."""

    code = "stale_write"
    default_message = "The resource was modified concurrently. Reload it and retry."
