# -*- coding: utf-8 -*-
"""Wishlist — DB storage helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..errors import NotFoundError


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def add_item(*, user_id: str, product_id: str) -> Dict[str, Any]:
    row = {
        "id": str(uuid4()),
        "user_id": user_id,
        "product_id": product_id,
        "created_at": _utc_now(),
    }
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            "INSERT INTO wishlist (id, user_id, product_id, created_at) VALUES (?, ?, ?, ?)",
            (row["id"], user_id, product_id, row["created_at"]),
        )
    return row


def list_items(*, user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM wishlist WHERE user_id = ? ORDER BY created_at DESC, id ASC",
            (user_id,),
        ).fetchall()
    return [dict(r) for r in rows]


def remove_item(*, user_id: str, item_id: str) -> None:
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            "DELETE FROM wishlist WHERE id = ? AND user_id = ?",
            (item_id, user_id),
        )
        if cur.rowcount == 0:
            raise NotFoundError("Wishlist item not found")
