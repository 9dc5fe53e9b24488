# -*- coding: utf-8 -*-
"""Error taxonomy shared by the device client and the server.

Every error carries a ``category`` the UI layer maps to user-visible behavior:

- ``reauthenticate``: the session is gone, force a logout and show the login form
- ``retry``: likely transient, suggest trying again
- ``invalid``: the request itself must change before it can succeed
- ``fatal``: contract violation between client and server, contact support
"""

from __future__ import annotations

from typing import Optional

REAUTHENTICATE = "reauthenticate"
RETRY = "retry"
INVALID = "invalid"
FATAL = "fatal"


class SensitivvError(Exception):
    category: str = FATAL

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SensitivvError):
    """Malformed input, fixable by the caller before retrying."""

    category = INVALID


class NotLoggedInError(ValidationError):
    """A session operation needs a signed-in identity and there is none."""


class MissingIdentityError(SensitivvError):
    """An identity payload exposes no usable id under any known key."""

    category = INVALID


class ConflictError(SensitivvError):
    category = INVALID


class NotFoundError(SensitivvError):
    category = INVALID


class AuthenticationError(SensitivvError):
    """Server side: no identity header, or bad credentials."""

    category = REAUTHENTICATE


class ForbiddenError(SensitivvError):
    """Server side: identity header present but it resolves to no known user."""

    category = REAUTHENTICATE


class SessionExpiredError(SensitivvError):
    category = REAUTHENTICATE


class ProtocolError(SensitivvError):
    category = FATAL


class StorageError(SensitivvError):
    category = RETRY


class RequestError(SensitivvError):
    """Non-2xx answer from the API (other than 401)."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status

    @property
    def category(self) -> str:  # type: ignore[override]
        if self.status is None or self.status >= 500:
            return RETRY
        if self.status == 403:
            return REAUTHENTICATE
        return INVALID


class TransportError(RequestError):
    """The exchange never produced a response (network failure or timeout)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status=None)
