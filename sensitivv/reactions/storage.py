# -*- coding: utf-8 -*-
"""Reactions — create-or-overwrite storage for product and ingredient reactions.

Both variants share one implementation; a ``ReactionKind`` names the table and
the column holding the target key. ``(user_id, target)`` is UNIQUE in both
tables, and the lookup plus write runs inside one write transaction.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple
from uuid import uuid4

from ..app_db import db_conn, write_txn
from ..config import settings
from ..errors import ConflictError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReactionKind:
    table: str
    target_column: str


PRODUCT = ReactionKind(table="product_reactions", target_column="product_id")
INGREDIENT = ReactionKind(table="ingredient_reactions", target_column="ingredient_name")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def set_reaction(kind: ReactionKind, *, user_id: str, target_key: str, reaction: str) -> Tuple[Dict[str, Any], bool]:
    """Store ``reaction`` for ``(user_id, target_key)``.

    Returns the stored row and whether it was newly created.
    """
    target_key = (target_key or "").strip()
    if not target_key:
        raise ValidationError(f"{kind.target_column} is required")
    if not reaction:
        raise ValidationError("reaction is required")

    now = _utc_now()
    created = False
    try:
        with write_txn(settings.app_db_path) as conn:
            existing = conn.execute(
                f"SELECT id FROM {kind.table} WHERE user_id = ? AND {kind.target_column} = ?",
                (user_id, target_key),
            ).fetchone()
            if existing:
                row_id = existing["id"]
                conn.execute(
                    f"UPDATE {kind.table} SET reaction = ?, updated_at = ? WHERE id = ?",
                    (reaction, now, row_id),
                )
            else:
                row_id = str(uuid4())
                conn.execute(
                    f"""
                    INSERT INTO {kind.table} (id, user_id, {kind.target_column}, reaction, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (row_id, user_id, target_key, reaction, now, now),
                )
                created = True
            row = conn.execute(f"SELECT * FROM {kind.table} WHERE id = ?", (row_id,)).fetchone()
    except sqlite3.IntegrityError as exc:
        raise ConflictError(f"Concurrent write for {kind.target_column} {target_key!r}") from exc
    logger.debug("%s %s reaction for user %s", "Created" if created else "Updated", kind.table, user_id)
    return dict(row), created


def remove_reaction(kind: ReactionKind, *, user_id: str, target_key: str) -> bool:
    """Delete the reaction if present. Returns whether a row was removed."""
    target_key = (target_key or "").strip()
    with db_conn(settings.app_db_path) as conn:
        cur = conn.execute(
            f"DELETE FROM {kind.table} WHERE user_id = ? AND {kind.target_column} = ?",
            (user_id, target_key),
        )
        return cur.rowcount > 0


def list_reactions(kind: ReactionKind, *, user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            f"SELECT * FROM {kind.table} WHERE user_id = ? ORDER BY created_at ASC, id ASC",
            (user_id,),
        ).fetchall()
    return [dict(r) for r in rows]
