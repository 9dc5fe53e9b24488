# -*- coding: utf-8 -*-
"""Articles — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..auth.security import get_current_user
from .models import Article, ArticleCreateRequest, ArticleListResponse
from .storage import create_article, list_articles

router = APIRouter(prefix="/api/articles", tags=["Articles"])


@router.get("", response_model=ArticleListResponse, summary="List articles")
def get_articles(user: dict = Depends(get_current_user)):
    items = [Article(**r) for r in list_articles()]
    return ArticleListResponse(count=len(items), items=items)


@router.post("", response_model=Article, status_code=status.HTTP_201_CREATED, summary="Publish an article")
def add_article(request: ArticleCreateRequest, user: dict = Depends(get_current_user)):
    row = create_article(
        title=request.title,
        content=request.content,
        author=request.author,
        created_by=user["id"],
    )
    return Article(**row)
