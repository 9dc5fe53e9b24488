# -*- coding: utf-8 -*-
"""Trials — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

TestResult = Literal["Critic", "Sensitive", "Safe"]


class TestStartRequest(BaseModel):
    item_id: str = Field(..., min_length=1, description="Product being trialled")


class TestCompleteRequest(BaseModel):
    result: Optional[TestResult] = None


class TestRecord(BaseModel):
    id: str
    user_id: str
    item_id: str
    start_date: str
    finish_date: str
    completed: bool
    result: Optional[TestResult] = None
    completed_at: Optional[str] = None


class TestListResponse(BaseModel):
    count: int
    items: List[TestRecord]
