# -*- coding: utf-8 -*-
"""Articles — shared collection, readable by every signed-in user."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def create_article(*, title: str, content: str, author: Optional[str], created_by: str) -> Dict[str, Any]:
    row = {
        "id": str(uuid4()),
        "title": title.strip(),
        "content": content,
        "author": author,
        "created_by": created_by,
        "created_at": _utc_now(),
    }
    with db_conn(settings.app_db_path) as conn:
        conn.execute(
            """
            INSERT INTO articles (id, title, content, author, created_by, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            tuple(row.values()),
        )
    return row


def list_articles() -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        rows = conn.execute("SELECT * FROM articles ORDER BY created_at DESC, id ASC").fetchall()
    return [dict(r) for r in rows]
