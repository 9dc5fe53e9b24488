# -*- coding: utf-8 -*-
"""Trials — API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..auth.security import get_current_user
from .models import TestCompleteRequest, TestListResponse, TestRecord, TestStartRequest
from .storage import complete_test, list_tests, start_test

router = APIRouter(prefix="/api/tests", tags=["Tests"])


@router.get("", response_model=TestListResponse, summary="List the user's tests")
def list_user_tests(user: dict = Depends(get_current_user)):
    items = [TestRecord(**t) for t in list_tests(user_id=user["id"])]
    return TestListResponse(count=len(items), items=items)


@router.post("", response_model=TestRecord, status_code=status.HTTP_201_CREATED, summary="Start a sensitivity test")
def start_user_test(request: TestStartRequest, user: dict = Depends(get_current_user)):
    return TestRecord(**start_test(user_id=user["id"], item_id=request.item_id))


@router.put("/{test_id}", response_model=TestRecord, summary="Complete a sensitivity test")
def complete_user_test(test_id: str, request: TestCompleteRequest, user: dict = Depends(get_current_user)):
    return TestRecord(**complete_test(user_id=user["id"], test_id=test_id, result=request.result))
