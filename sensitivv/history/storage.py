# -*- coding: utf-8 -*-
"""History — DB storage helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def add_entry(*, user_id: str, product_id: str, action: str, details: Optional[str] = None) -> Dict[str, Any]:
    row = {
        "id": str(uuid4()),
        "user_id": user_id,
        "product_id": product_id,
        "action": action,
        "details": details,
        "created_at": _utc_now(),
    }
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO history (id, user_id, product_id, action, details, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            tuple(row.values()),
        )
    return row


def list_entries(*, user_id: str, limit: int = 200) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM history WHERE user_id = ? ORDER BY created_at DESC, id ASC LIMIT ?",
            (user_id, limit),
        ).fetchall()
    return [dict(r) for r in rows]
