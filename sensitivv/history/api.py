# -*- coding: utf-8 -*-
"""History — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from ..auth.security import get_current_user
from .models import HistoryCreateRequest, HistoryEntry, HistoryResponse
from .storage import add_entry, list_entries

router = APIRouter(prefix="/api/history", tags=["History"])


@router.get("", response_model=HistoryResponse, summary="List the current user's product history")
def get_history(limit: int = Query(200, ge=1, le=1000), user: dict = Depends(get_current_user)):
    items = [HistoryEntry(**r) for r in list_entries(user_id=user["id"], limit=limit)]
    return HistoryResponse(count=len(items), items=items)


@router.post("", response_model=HistoryEntry, status_code=status.HTTP_201_CREATED, summary="Record a history entry")
def add_history(request: HistoryCreateRequest, user: dict = Depends(get_current_user)):
    row = add_entry(
        user_id=user["id"],
        product_id=request.product_id,
        action=request.action,
        details=request.details,
    )
    return HistoryEntry(**row)
