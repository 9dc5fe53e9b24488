# -*- coding: utf-8 -*-
"""Auth — password hashing + User-ID header authentication + FastAPI helpers."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import os
from typing import Any, Dict, Optional

from fastapi import Depends, Request

from ..errors import AuthenticationError, ForbiddenError
from .storage import get_user_by_id, get_user_by_legacy_id

logger = logging.getLogger(__name__)

# Header lookups are case-insensitive, so these cover User-ID/user-id and
# UserID/userID/userid.
USER_ID_HEADERS = ("user-id", "userid")

# Password hashing (stdlib pbkdf2_hmac).
_PBKDF2_ALG = "sha256"
_PBKDF2_ITERATIONS = 200_000


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac(_PBKDF2_ALG, password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"pbkdf2_{_PBKDF2_ALG}${_PBKDF2_ITERATIONS}${_b64url_encode(salt)}${_b64url_encode(dk)}"


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    # Google accounts have no local password.
    if not password_hash:
        return False
    try:
        scheme, iter_s, salt_b64, dk_b64 = password_hash.split("$", 3)
        if not scheme.startswith("pbkdf2_"):
            return False
        alg = scheme.split("_", 1)[1]
        iterations = int(iter_s)
        salt = _b64url_decode(salt_b64)
        expected = _b64url_decode(dk_b64)
        actual = hashlib.pbkdf2_hmac(alg, password.encode("utf-8"), salt, iterations)
    except ValueError:
        return False
    return hmac.compare_digest(actual, expected)


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    pad = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode((data + pad).encode("ascii"))


def get_user_id_from_request(request: Request) -> Optional[str]:
    for name in USER_ID_HEADERS:
        value = request.headers.get(name)
        if value and value.strip():
            return value.strip()
    return None


def resolve_user(user_id: str) -> Optional[Dict[str, Any]]:
    """Find a user by canonical id, falling back to the legacy id."""
    user = get_user_by_id(user_id)
    if user:
        return user
    user = get_user_by_legacy_id(user_id)
    if user:
        logger.debug("User %s resolved through legacy id", user["id"])
    return user


def get_current_user_from_request(request: Request) -> Dict[str, Any]:
    # If middleware already authenticated, reuse it.
    user = getattr(request.state, "user", None)
    if user:
        return user

    user_id = get_user_id_from_request(request)
    if not user_id:
        raise AuthenticationError("Authentication required - missing User-ID")

    user = resolve_user(user_id)
    if not user:
        logger.info("Rejected unknown User-ID on %s", request.url.path)
        raise ForbiddenError("Invalid user ID")

    # Cache on request for downstream handlers.
    request.state.user = user
    return user


def get_current_user(user: Dict[str, Any] = Depends(get_current_user_from_request)) -> Dict[str, Any]:
    return user
