# -*- coding: utf-8 -*-
"""Articles — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ArticleCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    author: Optional[str] = Field(default=None, max_length=120)


class Article(BaseModel):
    id: str
    title: str
    content: str
    author: Optional[str] = None
    created_by: str
    created_at: str


class ArticleListResponse(BaseModel):
    count: int
    items: List[Article]
