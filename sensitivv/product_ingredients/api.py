# -*- coding: utf-8 -*-
"""Product ingredients — API endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ..auth.security import get_current_user
from .models import ProductIngredient, ProductIngredientCreateRequest, ProductIngredientListResponse
from .storage import add_ingredient, list_ingredients

router = APIRouter(prefix="/api/product-ingredients", tags=["Product ingredients"])


@router.get("", response_model=ProductIngredientListResponse, summary="List product ingredients")
def get_product_ingredients(
    product_id: Optional[str] = Query(None, description="Only ingredients of this product"),
    user: dict = Depends(get_current_user),
):
    items = [ProductIngredient(**r) for r in list_ingredients(product_id=product_id)]
    return ProductIngredientListResponse(count=len(items), items=items)


@router.post(
    "",
    response_model=ProductIngredient,
    status_code=status.HTTP_201_CREATED,
    summary="Add an ingredient to a product",
)
def add_product_ingredient(request: ProductIngredientCreateRequest, user: dict = Depends(get_current_user)):
    row = add_ingredient(
        product_id=request.product_id,
        ingredient_name=request.ingredient_name,
        created_by=user["id"],
    )
    return ProductIngredient(**row)
