# -*- coding: utf-8 -*-
"""Product notes — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..auth.security import get_current_user
from .models import NoteCreateRequest, NoteUpdateRequest, ProductNote, ProductNoteListResponse
from .storage import create_note, list_notes, update_note

router = APIRouter(prefix="/api/product-notes", tags=["Product notes"])


@router.get("", response_model=ProductNoteListResponse, summary="List product notes")
def get_notes(user: dict = Depends(get_current_user)):
    items = [ProductNote(**r) for r in list_notes(user_id=user["id"])]
    return ProductNoteListResponse(count=len(items), items=items)


@router.post("", response_model=ProductNote, status_code=status.HTTP_201_CREATED, summary="Add a product note")
def add_note(request: NoteCreateRequest, user: dict = Depends(get_current_user)):
    row = create_note(user_id=user["id"], product_id=request.product_id, note=request.note, rating=request.rating)
    return ProductNote(**row)


@router.put("/{note_id}", response_model=ProductNote, summary="Update a product note")
def edit_note(note_id: str, request: NoteUpdateRequest, user: dict = Depends(get_current_user)):
    row = update_note(user_id=user["id"], note_id=note_id, note=request.note, rating=request.rating)
    return ProductNote(**row)
