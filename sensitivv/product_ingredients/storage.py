# -*- coding: utf-8 -*-
"""Product ingredients — shared product → ingredient catalog.

A ``(product_id, ingredient_name)`` pair is stored once; adding it again is a
conflict.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..app_db import db_conn
from ..config import settings
from ..errors import ConflictError, ValidationError


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def add_ingredient(*, product_id: str, ingredient_name: str, created_by: str) -> Dict[str, Any]:
    product_id = product_id.strip()
    ingredient_name = ingredient_name.strip()
    if not product_id or not ingredient_name:
        raise ValidationError("Product ID and ingredient name are required")
    row = {
        "id": str(uuid4()),
        "product_id": product_id,
        "ingredient_name": ingredient_name,
        "created_by": created_by,
        "created_at": _utc_now(),
    }
    try:
        with db_conn(settings.app_db_path) as conn:
            conn.execute(
                """
                INSERT INTO product_ingredients (id, product_id, ingredient_name, created_by, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                tuple(row.values()),
            )
    except sqlite3.IntegrityError as exc:
        raise ConflictError(f"{ingredient_name!r} is already listed for product {product_id!r}") from exc
    return row


def list_ingredients(*, product_id: Optional[str] = None) -> List[Dict[str, Any]]:
    with db_conn(settings.app_db_path) as conn:
        if product_id:
            rows = conn.execute(
                "SELECT * FROM product_ingredients WHERE product_id = ? ORDER BY ingredient_name ASC",
                (product_id,),
            ).fetchall()
        else:
            rows = conn.execute(
                "SELECT * FROM product_ingredients ORDER BY product_id ASC, ingredient_name ASC"
            ).fetchall()
    return [dict(r) for r in rows]
