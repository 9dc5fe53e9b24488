# -*- coding: utf-8 -*-
"""Product notes — DB storage helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..errors import NotFoundError


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def create_note(*, user_id: str, product_id: str, note: str, rating: Optional[int] = None) -> Dict[str, Any]:
    now = _utc_now()
    row = {
        "id": str(uuid4()),
        "user_id": user_id,
        "product_id": product_id,
        "note": note,
        "rating": rating,
        "created_at": now,
        "updated_at": now,
    }
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO product_notes (id, user_id, product_id, note, rating, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            tuple(row.values()),
        )
    return row


def list_notes(*, user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM product_notes WHERE user_id = ? ORDER BY created_at DESC, id ASC",
            (user_id,),
        ).fetchall()
    return [dict(r) for r in rows]


def update_note(*, user_id: str, note_id: str, note: str, rating: Optional[int] = None) -> Dict[str, Any]:
    """Rewrite the note text; ``rating`` is only touched when given."""
    with db_conn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM product_notes WHERE id = ? AND user_id = ?",
            (note_id, user_id),
        ).fetchone()
        if not row:
            raise NotFoundError("Note not found or not authorized to update")
        current = dict(row)
        conn.execute(
            "UPDATE product_notes SET note = ?, rating = ?, updated_at = ? WHERE id = ?",
            (note, rating if rating is not None else current.get("rating"), _utc_now(), note_id),
        )
        row = conn.execute("SELECT * FROM product_notes WHERE id = ?", (note_id,)).fetchone()
    return dict(row)
