# -*- coding: utf-8 -*-
"""History — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class HistoryCreateRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    action: str = Field(default="viewed", min_length=1, max_length=64)
    details: Optional[str] = Field(default=None, max_length=2000)


class HistoryEntry(BaseModel):
    id: str
    user_id: str
    product_id: str
    action: str
    details: Optional[str] = None
    created_at: str


class HistoryResponse(BaseModel):
    count: int
    items: List[HistoryEntry]
