# -*- coding: utf-8 -*-
"""
Sensitivv API

Accounts, 3-day product sensitivity tests, product/ingredient reactions,
wishlist, product notes, history, articles and the product ingredient
catalog. Every /api route except login/signup and the health check requires
the User-ID header.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .app_db import db_conn, init_app_db
from .articles.api import router as articles_router
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .config import settings
from .errors import (
    AuthenticationError,
    ConflictError,
    ForbiddenError,
    MissingIdentityError,
    NotFoundError,
    SensitivvError,
    ValidationError,
)
from .history.api import router as history_router
from .notes.api import router as notes_router
from .product_ingredients.api import router as product_ingredients_router
from .reactions.api import router as reactions_router
from .trials.api import router as trials_router
from .wishlist.api import router as wishlist_router

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()

app = FastAPI(
    title="Sensitivv API",
    description="Product sensitivity tests and reaction tracking",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "User-ID", "UserID"],
)

# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)


_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (MissingIdentityError, 400),
    (AuthenticationError, 401),
    (ForbiddenError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def status_for_error(exc: SensitivvError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return 500


@app.exception_handler(SensitivvError)
async def _domain_error_handler(request: Request, exc: SensitivvError) -> JSONResponse:
    code = status_for_error(exc)
    if code >= 500:
        logger.error("Unhandled %s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(status_code=code, content={"detail": exc.message or type(exc).__name__})


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Missing or malformed body fields are a 400, like every other bad request.
    fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
    message = "Invalid request: " + ", ".join(f for f in fields if f) if any(fields) else "Invalid request"
    return JSONResponse(status_code=400, content={"detail": message, "errors": _jsonable_errors(exc)})


def _jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/login",
    "/api/auth/signup",
    "/api/auth/google-login",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if (
        request.method != "OPTIONS"
        and path.startswith("/api")
        and path != "/api/health"
        and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES)
    ):
        try:
            request.state.user = get_current_user_from_request(request)
        except SensitivvError as exc:
            return JSONResponse(status_code=status_for_error(exc), content={"detail": exc.message})
    return await call_next(request)


app.include_router(auth_router)
app.include_router(trials_router)
app.include_router(reactions_router)
app.include_router(wishlist_router)
app.include_router(notes_router)
app.include_router(history_router)
app.include_router(articles_router)
app.include_router(product_ingredients_router)


@app.get("/api/health")
def health() -> dict:
    try:
        with db_conn(settings.app_db_path) as conn:
            conn.execute("SELECT 1").fetchone()
        db_state = "connected"
    except Exception as exc:
        logger.warning("Health check could not reach the database: %s", exc)
        db_state = "unavailable"
    return {
        "status": "ok",
        "db": db_state,
        "uptime_sec": round(time.monotonic() - _STARTED_AT, 1),
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


@app.get("/", include_in_schema=False)
def root() -> dict:
    return {"message": "Sensitivv API is running", "version": __version__}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("sensitivv.api:app", host=settings.host, port=settings.port, reload=False)
