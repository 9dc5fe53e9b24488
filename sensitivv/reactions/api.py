# -*- coding: utf-8 -*-
"""Reactions — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from ..auth.security import get_current_user
from .models import (
    IngredientReaction,
    IngredientReactionListResponse,
    IngredientReactionRequest,
    ProductReaction,
    ProductReactionListResponse,
    ProductReactionRequest,
)
from .storage import INGREDIENT, PRODUCT, list_reactions, remove_reaction, set_reaction

router = APIRouter(prefix="/api", tags=["Reactions"])


def _status_for(created: bool) -> int:
    return status.HTTP_201_CREATED if created else status.HTTP_200_OK


@router.get("/product-reactions", response_model=ProductReactionListResponse, summary="List product reactions")
def list_product_reactions(user: dict = Depends(get_current_user)):
    items = [ProductReaction(**r) for r in list_reactions(PRODUCT, user_id=user["id"])]
    return ProductReactionListResponse(count=len(items), items=items)


@router.post("/product-reactions", response_model=ProductReaction, summary="Create or overwrite a product reaction")
def save_product_reaction(request: ProductReactionRequest, response: Response, user: dict = Depends(get_current_user)):
    row, created = set_reaction(PRODUCT, user_id=user["id"], target_key=request.product_id, reaction=request.reaction)
    response.status_code = _status_for(created)
    return ProductReaction(**row)


@router.delete("/product-reactions/{product_id:path}", summary="Delete a product reaction")
def delete_product_reaction(product_id: str, user: dict = Depends(get_current_user)):
    removed = remove_reaction(PRODUCT, user_id=user["id"], target_key=product_id)
    return {"status": "ok", "product_id": product_id, "removed": removed}


@router.get("/ingredient-reactions", response_model=IngredientReactionListResponse, summary="List ingredient reactions")
def list_ingredient_reactions(user: dict = Depends(get_current_user)):
    items = [IngredientReaction(**r) for r in list_reactions(INGREDIENT, user_id=user["id"])]
    return IngredientReactionListResponse(count=len(items), items=items)


@router.post("/ingredient-reactions", response_model=IngredientReaction, summary="Create or overwrite an ingredient reaction")
def save_ingredient_reaction(
    request: IngredientReactionRequest,
    response: Response,
    user: dict = Depends(get_current_user),
):
    row, created = set_reaction(
        INGREDIENT,
        user_id=user["id"],
        target_key=request.ingredient_name,
        reaction=request.reaction,
    )
    response.status_code = _status_for(created)
    return IngredientReaction(**row)


@router.delete("/ingredient-reactions/{ingredient_name:path}", summary="Delete an ingredient reaction")
def delete_ingredient_reaction(ingredient_name: str, user: dict = Depends(get_current_user)):
    removed = remove_reaction(INGREDIENT, user_id=user["id"], target_key=ingredient_name)
    return {"status": "ok", "ingredient_name": ingredient_name, "removed": removed}
