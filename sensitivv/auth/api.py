# -*- coding: utf-8 -*-
"""Auth — API endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from ..errors import AuthenticationError, ConflictError, ValidationError
from .models import (
    AuthResponse,
    ChangePasswordRequest,
    GoogleLoginRequest,
    LoginRequest,
    SignupRequest,
    TrialPeriodRequest,
    UserPublic,
)
from .security import get_current_user, hash_password, verify_password
from .storage import create_user, get_user_by_email, get_user_by_google_id, update_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _user_public(row: dict) -> UserPublic:
    return UserPublic(
        id=row["id"],
        legacy_id=row.get("legacy_id"),
        email=row["email"],
        name=row["name"],
        provider=row.get("provider") or "local",
        language=row.get("language") or "en",
        trial_period_days=int(row.get("trial_period_days") or 5),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED, summary="Register a new user")
def signup(request: SignupRequest):
    if get_user_by_email(request.email):
        raise ConflictError("Email already registered")
    user = create_user(
        email=request.email,
        name=request.name,
        password_hash=hash_password(request.password),
        language=request.language,
    )
    logger.info("Registered user %s", user["id"])
    return AuthResponse(user=_user_public(user))


@router.post("/login", response_model=AuthResponse, summary="Login with email and password")
def login(request: LoginRequest):
    user = get_user_by_email(request.email)
    if not user or not verify_password(request.password, user.get("password_hash")):
        raise AuthenticationError("Invalid email or password")
    logger.info("User %s logged in", user["id"])
    return AuthResponse(user=_user_public(user))


@router.post("/google-login", response_model=AuthResponse, summary="Login or register with a Google account")
def google_login(request: GoogleLoginRequest):
    user = get_user_by_google_id(request.google_id)
    if not user:
        user = get_user_by_email(request.email)
        if user:
            # Link an existing local account to the Google identity.
            user = update_user(user["id"], google_id=request.google_id)
        else:
            user = create_user(
                email=request.email,
                name=request.name or request.email.split("@", 1)[0],
                password_hash=None,
                provider="google",
                google_id=request.google_id,
            )
            logger.info("Registered Google user %s", user["id"])
    return AuthResponse(user=_user_public(user))


@router.get("/profile", response_model=UserPublic, summary="Get current user")
def profile(user: dict = Depends(get_current_user)):
    return _user_public(user)


@router.post("/change-password", summary="Change the local password")
def change_password(request: ChangePasswordRequest, user: dict = Depends(get_current_user)):
    if not verify_password(request.current_password, user.get("password_hash")):
        raise ValidationError("Current password is incorrect")
    update_user(user["id"], password_hash=hash_password(request.new_password))
    return {"status": "ok"}


@router.post("/update-trial-period", response_model=UserPublic, summary="Set the default sensitivity trial length")
def update_trial_period(request: TrialPeriodRequest, user: dict = Depends(get_current_user)):
    row = update_user(user["id"], trial_period_days=request.trial_days)
    return _user_public(row)
