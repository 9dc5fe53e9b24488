# -*- coding: utf-8 -*-
"""Auth — DB storage helpers."""

from __future__ import annotations

import secrets
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..errors import ConflictError, NotFoundError

_UPDATABLE = {"name", "password_hash", "language", "trial_period_days", "google_id", "provider"}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _norm_email(email: str) -> str:
    return email.lower().strip()


def _fetch_one(sql: str, params: tuple) -> Optional[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(sql, params).fetchone()
        return dict(row) if row else None


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    return _fetch_one("SELECT * FROM users WHERE email = ?", (_norm_email(email),))


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    return _fetch_one("SELECT * FROM users WHERE id = ?", (user_id,))


def get_user_by_legacy_id(legacy_id: str) -> Optional[Dict[str, Any]]:
    return _fetch_one("SELECT * FROM users WHERE legacy_id = ?", (legacy_id,))


def get_user_by_google_id(google_id: str) -> Optional[Dict[str, Any]]:
    return _fetch_one("SELECT * FROM users WHERE google_id = ?", (google_id,))


def create_user(
    *,
    email: str,
    name: str,
    password_hash: Optional[str],
    language: str = "en",
    provider: str = "local",
    google_id: Optional[str] = None,
) -> Dict[str, Any]:
    now = _utc_now()
    row = {
        "id": str(uuid4()),
        # Same shape as the document-store ids older clients still send.
        "legacy_id": secrets.token_hex(12),
        "email": _norm_email(email),
        "name": name.strip(),
        "password_hash": password_hash,
        "provider": provider,
        "google_id": google_id,
        "language": language,
        "trial_period_days": settings.default_trial_period_days,
        "created_at": now,
        "updated_at": now,
    }
    try:
        with db_conn(settings.app_db_path) as conn:
            conn.execute(
                """
                INSERT INTO users (
                    id, legacy_id, email, name, password_hash, provider, google_id,
                    language, trial_period_days, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                tuple(row.values()),
            )
    except sqlite3.IntegrityError as exc:
        raise ConflictError("Email already registered") from exc
    return row


def update_user(user_id: str, **fields: Any) -> Dict[str, Any]:
    unknown = set(fields) - _UPDATABLE
    if unknown:
        raise ValueError(f"cannot update user fields: {sorted(unknown)}")
    fields["updated_at"] = _utc_now()
    assignments = ", ".join(f"{key} = ?" for key in fields)
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            f"UPDATE users SET {assignments} WHERE id = ?",
            (*fields.values(), user_id),
        )
        if cur.rowcount == 0:
            raise NotFoundError("User not found")
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    return dict(row)
