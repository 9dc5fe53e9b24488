# -*- coding: utf-8 -*-
"""Product notes — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class NoteCreateRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    note: str = Field(..., min_length=1, max_length=5000)
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class NoteUpdateRequest(BaseModel):
    note: str = Field(..., min_length=1, max_length=5000)
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class ProductNote(BaseModel):
    id: str
    user_id: str
    product_id: str
    note: str
    rating: Optional[int] = None
    created_at: str
    updated_at: str


class ProductNoteListResponse(BaseModel):
    count: int
    items: List[ProductNote]
