# -*- coding: utf-8 -*-
"""API gateway — authenticated calls to the Sensitivv API.

``ApiClient.call`` attaches the signed-in identity, sends one request and
classifies the answer. It never retries; retrying is the caller's decision.
The typed wrappers below only shape endpoints and bodies, and run every
returned identity payload through the reconciler before it reaches the
session store.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..articles.models import Article
from ..auth.models import UserPublic
from ..config import settings
from ..errors import (
    ProtocolError,
    RequestError,
    SensitivvError,
    SessionExpiredError,
    TransportError,
    ValidationError,
)
from ..history.models import HistoryEntry
from ..identity import Identity, parse_identity, reconcile
from ..notes.models import ProductNote
from ..product_ingredients.models import ProductIngredient
from ..reactions.models import IngredientReaction, ProductReaction
from ..trials.models import TestRecord
from ..wishlist.models import WishlistItem
from .session import SessionStore, StoredIdentity

logger = logging.getLogger(__name__)

USER_ID_HEADER = "User-ID"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _is_json(resp: httpx.Response) -> bool:
    content_type = (resp.headers.get("content-type") or "").lower()
    return "application/json" in content_type or "+json" in content_type


def _error_message(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    message = data.get("error") or data.get("detail") or data.get("message")
    if isinstance(message, list):
        message = "; ".join(str(m.get("msg", m)) if isinstance(m, dict) else str(m) for m in message)
    return str(message) if message else None


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def _as_model(model: Type[ModelT], data: Any) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ProtocolError(f"Unexpected {model.__name__} payload: {exc}") from exc


def _as_models(model: Type[ModelT], data: Any) -> List[ModelT]:
    items = data.get("items") if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise ProtocolError(f"Expected a list of {model.__name__}")
    return [_as_model(model, item) for item in items]


class ApiClient:
    def __init__(
        self,
        session: SessionStore,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.session = session
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self._timeout = settings.http_timeout if timeout is None else timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )

    async def call(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        identity = self.session.load()
        req_headers = {"Accept": "application/json"}
        if identity:
            req_headers[USER_ID_HEADER] = identity.id
        req_headers.update(headers or {})

        logger.debug("%s %s as %s", method, endpoint, identity.id if identity else "anonymous")
        try:
            async with self._client() as client:
                resp = await client.request(method, endpoint, json=json, params=params, headers=req_headers)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed before a response: %s", method, endpoint, exc)
            raise TransportError(f"{method} {endpoint} failed: {exc}") from exc

        logger.debug("%s %s -> %s", method, endpoint, resp.status_code)
        return self._classify(resp, method, endpoint)

    def _classify(self, resp: httpx.Response, method: str, endpoint: str) -> Any:
        status = resp.status_code
        if status == 401:
            logger.warning("%s %s: session expired", method, endpoint)
            raise SessionExpiredError("Session expired")

        if not resp.is_success:
            message = None
            if _is_json(resp):
                try:
                    message = _error_message(resp.json())
                except ValueError:
                    message = None
            logger.warning("%s %s failed with %s: %s", method, endpoint, status, message)
            raise RequestError(message or f"Request failed with status {status}", status=status)

        if not _is_json(resp):
            content_type = resp.headers.get("content-type") or "none"
            logger.error("%s %s returned non-JSON content type %s: %s", method, endpoint, content_type, resp.text[:200])
            raise ProtocolError(f"Server returned unexpected content type: {content_type}")
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("%s %s returned malformed JSON", method, endpoint)
            raise ProtocolError("Server returned malformed JSON") from exc

    async def diagnose(self) -> Dict[str, Any]:
        """Reachability + identity probe for operator logs. Never raises."""
        report: Dict[str, Any] = {"base_url": self.base_url, "reachable": False, "status": None, "user_id": None}
        try:
            report["user_id"] = self.session.current_user_id()
        except SensitivvError as exc:
            report["session_error"] = str(exc)
        try:
            async with self._client() as client:
                resp = await client.get("/")
            report["reachable"] = True
            report["status"] = resp.status_code
        except httpx.RequestError as exc:
            report["error"] = str(exc)
        logger.info("API diagnostic: %s", report)
        return report

    # ---- Accounts ----

    def _remember(self, data: Any) -> StoredIdentity:
        user = data.get("user") if isinstance(data, dict) else None
        if not isinstance(user, dict):
            raise ProtocolError("Auth response is missing the user")
        return self.session.save(reconcile(user))

    async def login(self, email: str, password: str) -> StoredIdentity:
        if not email or not password:
            raise ValidationError("Email and password are required")
        data = await self.call("/api/auth/login", method="POST", json={"email": email, "password": password})
        return self._remember(data)

    async def signup(self, *, name: str, email: str, password: str, language: str = "en") -> StoredIdentity:
        if not name or not email or not password:
            raise ValidationError("Name, email and password are required")
        data = await self.call(
            "/api/auth/signup",
            method="POST",
            json={"name": name, "email": email, "password": password, "language": language},
        )
        return self._remember(data)

    async def google_login(
        self,
        *,
        email: str,
        name: str,
        google_id: str,
        id_token: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> StoredIdentity:
        data = await self.call(
            "/api/auth/google-login",
            method="POST",
            json={
                "email": email,
                "name": name,
                "google_id": google_id,
                "id_token": id_token,
                "access_token": access_token,
            },
        )
        return self._remember(data)

    def logout(self) -> None:
        self.session.clear()

    async def get_profile(self) -> Identity:
        data = await self.call("/api/auth/profile")
        try:
            return parse_identity(data)
        except PydanticValidationError as exc:
            raise ProtocolError(f"Unexpected profile payload: {exc}") from exc

    async def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        return await self.call(
            "/api/auth/change-password",
            method="POST",
            json={"current_password": current_password, "new_password": new_password},
        )

    async def update_trial_period(self, trial_days: int) -> StoredIdentity:
        data = await self.call("/api/auth/update-trial-period", method="POST", json={"trial_days": trial_days})
        user = _as_model(UserPublic, reconcile(data))
        return self.session.update({"trial_period_days": user.trial_period_days, "updated_at": user.updated_at})

    # ---- Tests ----

    async def get_tests(self) -> List[TestRecord]:
        data = await self.call("/api/tests")
        return _as_models(TestRecord, data)

    async def start_test(self, item_id: str) -> TestRecord:
        data = await self.call("/api/tests", method="POST", json={"item_id": item_id})
        return _as_model(TestRecord, data)

    async def complete_test(self, test_id: str, result: Optional[str] = None) -> TestRecord:
        data = await self.call(f"/api/tests/{_segment(test_id)}", method="PUT", json={"result": result})
        return _as_model(TestRecord, data)

    # ---- Reactions ----

    async def get_product_reactions(self) -> List[ProductReaction]:
        data = await self.call("/api/product-reactions")
        return _as_models(ProductReaction, data)

    async def save_product_reaction(self, product_id: str, reaction: str) -> ProductReaction:
        data = await self.call(
            "/api/product-reactions",
            method="POST",
            json={"product_id": product_id, "reaction": reaction},
        )
        return _as_model(ProductReaction, data)

    async def delete_product_reaction(self, product_id: str) -> None:
        await self.call(f"/api/product-reactions/{_segment(product_id)}", method="DELETE")

    async def get_ingredient_reactions(self) -> List[IngredientReaction]:
        data = await self.call("/api/ingredient-reactions")
        return _as_models(IngredientReaction, data)

    async def save_ingredient_reaction(self, ingredient_name: str, reaction: str) -> IngredientReaction:
        data = await self.call(
            "/api/ingredient-reactions",
            method="POST",
            json={"ingredient_name": ingredient_name, "reaction": reaction},
        )
        return _as_model(IngredientReaction, data)

    async def delete_ingredient_reaction(self, ingredient_name: str) -> None:
        await self.call(f"/api/ingredient-reactions/{_segment(ingredient_name)}", method="DELETE")

    # ---- Wishlist ----

    async def get_wishlist(self) -> List[WishlistItem]:
        data = await self.call("/api/wishlist")
        return _as_models(WishlistItem, data)

    async def add_to_wishlist(self, product_id: str) -> WishlistItem:
        data = await self.call("/api/wishlist", method="POST", json={"product_id": product_id})
        return _as_model(WishlistItem, data)

    async def remove_from_wishlist(self, item_id: str) -> None:
        await self.call(f"/api/wishlist/{_segment(item_id)}", method="DELETE")

    # ---- Product notes ----

    async def get_product_notes(self) -> List[ProductNote]:
        data = await self.call("/api/product-notes")
        return _as_models(ProductNote, data)

    async def add_product_note(self, product_id: str, note: str, rating: Optional[int] = None) -> ProductNote:
        data = await self.call(
            "/api/product-notes",
            method="POST",
            json={"product_id": product_id, "note": note, "rating": rating},
        )
        return _as_model(ProductNote, data)

    async def update_product_note(self, note_id: str, note: str, rating: Optional[int] = None) -> ProductNote:
        data = await self.call(
            f"/api/product-notes/{_segment(note_id)}",
            method="PUT",
            json={"note": note, "rating": rating},
        )
        return _as_model(ProductNote, data)

    # ---- History ----

    async def get_history(self, limit: Optional[int] = None) -> List[HistoryEntry]:
        params = {"limit": limit} if limit is not None else None
        data = await self.call("/api/history", params=params)
        return _as_models(HistoryEntry, data)

    async def add_history(self, product_id: str, action: str = "viewed", details: Optional[str] = None) -> HistoryEntry:
        data = await self.call(
            "/api/history",
            method="POST",
            json={"product_id": product_id, "action": action, "details": details},
        )
        return _as_model(HistoryEntry, data)

    # ---- Articles ----

    async def get_articles(self) -> List[Article]:
        data = await self.call("/api/articles")
        return _as_models(Article, data)

    async def add_article(self, title: str, content: str, author: Optional[str] = None) -> Article:
        data = await self.call(
            "/api/articles",
            method="POST",
            json={"title": title, "content": content, "author": author},
        )
        return _as_model(Article, data)

    # ---- Product ingredients ----

    async def get_product_ingredients(self, product_id: Optional[str] = None) -> List[ProductIngredient]:
        params = {"product_id": product_id} if product_id else None
        data = await self.call("/api/product-ingredients", params=params)
        return _as_models(ProductIngredient, data)

    async def add_product_ingredient(self, product_id: str, ingredient_name: str) -> ProductIngredient:
        data = await self.call(
            "/api/product-ingredients",
            method="POST",
            json={"product_id": product_id, "ingredient_name": ingredient_name},
        )
        return _as_model(ProductIngredient, data)
