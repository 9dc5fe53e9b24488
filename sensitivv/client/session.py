# -*- coding: utf-8 -*-
"""Session store — the signed-in identity persisted on this device.

There is at most one session per storage backend, kept under a single key.
Corrupt or incomplete records are deleted on read instead of being surfaced.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..config import settings
from ..errors import MissingIdentityError, NotLoggedInError, ValidationError
from ..identity import reconcile
from .storage import FileSecureStorage, SecureStorage

logger = logging.getLogger(__name__)

SESSION_KEY = "current_user"

# Field names older payloads use for the same values.
_LEGACY_FIELDS = {
    "_id": "legacy_id",
    "authProvider": "provider",
    "googleId": "google_id",
    "trialPeriodDays": "trial_period_days",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class StoredIdentity(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1)
    legacy_id: Optional[str] = None
    email: str = Field(..., min_length=1)
    name: str = ""
    provider: Literal["local", "google"] = "local"
    google_id: Optional[str] = None
    language: str = "en"
    trial_period_days: int = Field(5, ge=1)
    created_at: str
    updated_at: str


def _as_dict(identity: Union[Mapping[str, Any], BaseModel]) -> Dict[str, Any]:
    if isinstance(identity, BaseModel):
        return identity.model_dump()
    if isinstance(identity, Mapping):
        return dict(identity)
    raise ValidationError("Identity must be an object")


def _normalize(data: Mapping[str, Any]) -> Dict[str, Any]:
    now = _utc_now()
    out = {key: value for key, value in data.items() if key not in _LEGACY_FIELDS}
    for legacy, field in _LEGACY_FIELDS.items():
        if out.get(field) in (None, "") and data.get(legacy) not in (None, ""):
            out[field] = data[legacy]
    return {
        "id": out["id"],
        "legacy_id": out.get("legacy_id"),
        "email": out["email"],
        "name": out.get("name") or "",
        "provider": out.get("provider") or "local",
        "google_id": out.get("google_id"),
        "language": out.get("language") or "en",
        "trial_period_days": out.get("trial_period_days") or 5,
        "created_at": out.get("created_at") or now,
        "updated_at": out.get("updated_at") or now,
    }


class SessionStore:
    def __init__(self, storage: SecureStorage, *, key: str = SESSION_KEY) -> None:
        self._storage = storage
        self._key = key

    def save(self, identity: Union[Mapping[str, Any], BaseModel]) -> StoredIdentity:
        """Validate, normalize and persist ``identity``, replacing any prior session."""
        data = _as_dict(identity)
        if not data.get("email"):
            raise ValidationError("Identity must include an email")
        try:
            data = reconcile(data)
        except MissingIdentityError as exc:
            raise ValidationError("Identity must include a valid id") from exc
        try:
            record = StoredIdentity.model_validate(_normalize(data))
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid identity: {exc}") from exc

        self._storage.set(self._key, record.model_dump_json())
        logger.debug("Saved session for %s", record.id)
        return record

    def load(self) -> Optional[StoredIdentity]:
        raw = self._storage.get(self._key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            if not isinstance(data, dict) or not data.get("email"):
                raise ValueError("stored session has no email")
            return StoredIdentity.model_validate(_normalize(reconcile(data)))
        except (ValueError, RecursionError, MissingIdentityError) as exc:
            # pydantic's ValidationError and JSONDecodeError are both ValueErrors;
            # json raises RecursionError on deeply nested input.
            logger.warning("Discarding corrupt stored session: %s", exc)
            self._storage.delete(self._key)
            return None

    def clear(self) -> None:
        self._storage.delete(self._key)
        logger.debug("Cleared session")

    def update(self, partial: Mapping[str, Any]) -> StoredIdentity:
        current = self.load()
        if current is None:
            raise NotLoggedInError("No user is logged in")
        merged = current.model_dump()
        merged.update(partial)
        merged["updated_at"] = _utc_now()
        return self.save(merged)

    def current_user_id(self) -> Optional[str]:
        current = self.load()
        return current.id if current else None

    def is_logged_in(self) -> bool:
        return self.load() is not None


def default_session_store() -> SessionStore:
    """Session store backed by files under ``SENSITIVV_SESSION_DIR``."""
    return SessionStore(FileSecureStorage(settings.session_dir))
