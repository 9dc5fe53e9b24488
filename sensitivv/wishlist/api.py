# -*- coding: utf-8 -*-
"""Wishlist — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..auth.security import get_current_user
from .models import WishlistAddRequest, WishlistItem, WishlistResponse
from .storage import add_item, list_items, remove_item

router = APIRouter(prefix="/api/wishlist", tags=["Wishlist"])


@router.get("", response_model=WishlistResponse, summary="List wishlist items")
def get_wishlist(user: dict = Depends(get_current_user)):
    items = [WishlistItem(**r) for r in list_items(user_id=user["id"])]
    return WishlistResponse(count=len(items), items=items)


@router.post("", response_model=WishlistItem, status_code=status.HTTP_201_CREATED, summary="Add a product to the wishlist")
def add_to_wishlist(request: WishlistAddRequest, user: dict = Depends(get_current_user)):
    return WishlistItem(**add_item(user_id=user["id"], product_id=request.product_id))


@router.delete("/{item_id}", summary="Remove a wishlist item")
def remove_from_wishlist(item_id: str, user: dict = Depends(get_current_user)):
    remove_item(user_id=user["id"], item_id=item_id)
    return {"status": "ok", "id": item_id}
