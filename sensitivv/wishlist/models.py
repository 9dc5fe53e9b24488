# -*- coding: utf-8 -*-
"""Wishlist — Pydantic models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class WishlistAddRequest(BaseModel):
    product_id: str = Field(..., min_length=1)


class WishlistItem(BaseModel):
    id: str
    user_id: str
    product_id: str
    created_at: str


class WishlistResponse(BaseModel):
    count: int
    items: List[WishlistItem]
