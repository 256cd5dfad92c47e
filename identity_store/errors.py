"""
Typed errors raised by the identity store.

Every error carries the offending value(s) in ``attributes`` so callers can
build a precise user-facing message. ``code`` is stable and safe to expose.
"""
from __future__ import annotations

from typing import Any, Dict


class StoreError(Exception):
    """Base class for classified store failures."""

    code = "store_error"
    message = "Identity store operation failed"

    def __init__(self, **attributes: Any) -> None:
        self.attributes: Dict[str, Any] = attributes
        super().__init__(self._format())

    def _format(self) -> str:
        if not self.attributes:
            return self.message
        details = ", ".join(f"{key}={value!r}" for key, value in self.attributes.items())
        return f"{self.message} ({details})"


class NotFound(StoreError):
    """A lookup matched no row."""

    code = "not_found"


class Conflict(StoreError):
    """A unique constraint rejected the write."""

    code = "conflict"


class UserNotFound(NotFound):
    code = "user_not_found"
    message = "User not found"


class UserEmailNotFound(NotFound):
    code = "user_email_not_found"
    message = "No user with that email address"


class UserIDTaken(Conflict):
    code = "user_id_taken"
    message = "User ID is already taken"


class UserEmailTaken(Conflict):
    code = "user_email_taken"
    message = "Email address is already taken"


class ValidationTokenNotFound(NotFound):
    code = "validation_token_not_found"
    message = "Validation token not found"


class APIKeyNotFound(NotFound):
    code = "api_key_not_found"
    message = "API key not found"


class APIKeyNameConflict(Conflict):
    code = "api_key_name_conflict"
    message = "An API key with that name already exists"


__all__ = [
    "StoreError",
    "NotFound",
    "Conflict",
    "UserNotFound",
    "UserEmailNotFound",
    "UserIDTaken",
    "UserEmailTaken",
    "ValidationTokenNotFound",
    "APIKeyNotFound",
    "APIKeyNameConflict",
]
