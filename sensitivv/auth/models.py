# -*- coding: utf-8 -*-
"""Auth — Pydantic models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=6, max_length=128)
    language: str = Field("en", min_length=2, max_length=8)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class GoogleLoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    name: str = Field("", max_length=120)
    google_id: str = Field(..., min_length=1)
    id_token: Optional[str] = None
    access_token: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=6, max_length=128)


class TrialPeriodRequest(BaseModel):
    trial_days: int = Field(..., ge=1, le=30)


class UserPublic(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    legacy_id: Optional[str] = Field(default=None, alias="_id")
    email: str
    name: str
    provider: Literal["local", "google"] = "local"
    language: str = "en"
    trial_period_days: int = 5
    created_at: str
    updated_at: str


class AuthResponse(BaseModel):
    user: UserPublic
