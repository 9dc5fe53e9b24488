# -*- coding: utf-8 -*-
"""Product ingredients — Pydantic models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class ProductIngredientCreateRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    ingredient_name: str = Field(..., min_length=1, max_length=200)


class ProductIngredient(BaseModel):
    id: str
    product_id: str
    ingredient_name: str
    created_by: str
    created_at: str


class ProductIngredientListResponse(BaseModel):
    count: int
    items: List[ProductIngredient]
