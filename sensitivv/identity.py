# -*- coding: utf-8 -*-
"""Identity reconciliation.

Identity payloads reach us from several places (login, signup, Google login,
the stored session) and older servers expose the primary key as ``userID`` or
``_id`` instead of ``id``. Everything that accepts such a payload goes through
``reconcile`` so the canonical ``id`` is always populated.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .errors import MissingIdentityError

CANONICAL_KEY = "id"
LEGACY_KEYS = ("userID", "_id")

Provider = Literal["local", "google"]


class Identity(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(..., min_length=1)
    email: str = ""
    name: str = ""
    provider: Provider = "local"


def _present(value: Any) -> bool:
    if value is None:
        return False
    return bool(str(value).strip())


def resolve_id(payload: Mapping[str, Any]) -> Any:
    """The first non-empty value among ``id``, ``userID`` and ``_id``, as stored."""
    if _present(payload.get(CANONICAL_KEY)):
        return payload[CANONICAL_KEY]
    for key in LEGACY_KEYS:
        if _present(payload.get(key)):
            return payload[key]
    return None


def reconcile(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``payload`` with the canonical ``id`` populated.

    The canonical value, or the legacy value copied into it, keeps its type;
    ``Identity`` turns numeric ids into strings when it validates.
    Raises ``MissingIdentityError`` when neither the canonical nor a legacy key
    holds a non-empty value.
    """
    if not isinstance(payload, Mapping):
        raise MissingIdentityError("Identity payload must be an object")
    user_id = resolve_id(payload)
    if user_id is None:
        raise MissingIdentityError("Identity payload has no id, userID or _id")
    out = dict(payload)
    out[CANONICAL_KEY] = user_id
    return out


def parse_identity(payload: Mapping[str, Any]) -> Identity:
    data = reconcile(payload)
    # Older payloads name the provider "authProvider".
    if "provider" not in data and data.get("authProvider"):
        data["provider"] = data["authProvider"]
    return Identity.model_validate(data)
