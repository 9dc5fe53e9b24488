# -*- coding: utf-8 -*-
"""Reactions — Pydantic models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class ProductReactionRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    reaction: str = Field(..., min_length=1, max_length=2000)


class IngredientReactionRequest(BaseModel):
    ingredient_name: str = Field(..., min_length=1, max_length=200)
    reaction: str = Field(..., min_length=1, max_length=2000)


class ProductReaction(BaseModel):
    id: str
    user_id: str
    product_id: str
    reaction: str
    created_at: str
    updated_at: str


class IngredientReaction(BaseModel):
    id: str
    user_id: str
    ingredient_name: str
    reaction: str
    created_at: str
    updated_at: str


class ProductReactionListResponse(BaseModel):
    count: int
    items: List[ProductReaction]


class IngredientReactionListResponse(BaseModel):
    count: int
    items: List[IngredientReaction]
