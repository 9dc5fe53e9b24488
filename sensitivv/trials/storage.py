# -*- coding: utf-8 -*-
"""Trials — state machine over the ``tests`` table.

``finish_date`` is informational; nothing here expires or completes a test on
its own. Completion is always an explicit call.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn, write_txn
from ..config import settings
from ..errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

RESULTS = ("Critic", "Sensitive", "Safe")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


def _row_to_test(row: Any) -> Dict[str, Any]:
    r = dict(row)
    return {
        "id": r["id"],
        "user_id": r["user_id"],
        "item_id": r["item_id"],
        "start_date": r["start_date"],
        "finish_date": r["finish_date"],
        "completed": bool(r["completed"]),
        "result": r.get("result"),
        "completed_at": r.get("completed_at"),
    }


def list_tests(*, user_id: str) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM tests WHERE user_id = ? ORDER BY start_date DESC, id ASC",
            (user_id,),
        ).fetchall()
    return [_row_to_test(r) for r in rows]


def start_test(*, user_id: str, item_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Open a new active test; ``ConflictError`` if one is already running for the item."""
    item_id = (item_id or "").strip()
    if not item_id:
        raise ValidationError("Product ID is required")
    start = now or _utc_now()
    finish = start + timedelta(days=int(settings.test_duration_days))
    test_id = str(uuid4())
    try:
        with write_txn(settings.app_db_path) as conn:
            existing = conn.execute(
                "SELECT id FROM tests WHERE user_id = ? AND item_id = ? AND completed = 0",
                (user_id, item_id),
            ).fetchone()
            if existing:
                raise ConflictError("Test already in progress for this product")
            conn.execute(
                """
                INSERT INTO tests (id, user_id, item_id, start_date, finish_date, completed, result, completed_at, created_at)
                VALUES (?, ?, ?, ?, ?, 0, NULL, NULL, ?)
                """,
                (test_id, user_id, item_id, _iso(start), _iso(finish), _iso(_utc_now())),
            )
            row = conn.execute("SELECT * FROM tests WHERE id = ?", (test_id,)).fetchone()
    except sqlite3.IntegrityError as exc:
        # Partial unique index on (user_id, item_id) WHERE completed = 0.
        raise ConflictError("Test already in progress for this product") from exc
    logger.info("Started test %s for user %s item %s", test_id, user_id, item_id)
    return _row_to_test(row)


def complete_test(*, user_id: str, test_id: str, result: Optional[str] = None) -> Dict[str, Any]:
    """Mark a test completed, recording ``result`` when given.

    Completing an already completed test is accepted: a new result overwrites
    the old one and ``completed_at`` keeps the first completion time.
    """
    if result is not None and result not in RESULTS:
        raise ValidationError(f"result must be one of {', '.join(RESULTS)}")
    with write_txn(settings.app_db_path) as conn:
        row = conn.execute(
            "SELECT * FROM tests WHERE id = ? AND user_id = ?",
            (test_id, user_id),
        ).fetchone()
        if not row:
            raise NotFoundError("Test not found")
        current = dict(row)
        conn.execute(
            "UPDATE tests SET completed = 1, result = ?, completed_at = ? WHERE id = ?",
            (
                result if result is not None else current.get("result"),
                current.get("completed_at") or _iso(_utc_now()),
                test_id,
            ),
        )
        row = conn.execute("SELECT * FROM tests WHERE id = ?", (test_id,)).fetchone()
    logger.info("Completed test %s (result=%s)", test_id, result)
    return _row_to_test(row)
