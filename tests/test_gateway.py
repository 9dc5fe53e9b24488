# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest
from typing import Callable, List

import httpx

from sensitivv.client.gateway import USER_ID_HEADER, ApiClient
from sensitivv.client.session import SessionStore
from sensitivv.client.storage import MemoryStorage
from sensitivv.errors import (
    RETRY,
    MissingIdentityError,
    ProtocolError,
    RequestError,
    SessionExpiredError,
    TransportError,
)

BASE_URL = "http://sensitivv.test"


class GatewayTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.requests: List[httpx.Request] = []
        self.session = SessionStore(MemoryStorage())

    def make_client(self, handler: Callable[[httpx.Request], httpx.Response]) -> ApiClient:
        def recording(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        return ApiClient(self.session, base_url=BASE_URL, transport=httpx.MockTransport(recording))


class TestCallClassification(GatewayTestCase):
    async def test_identity_header_attached_when_signed_in(self) -> None:
        self.session.save({"id": "u-1", "email": "a@b.com"})
        client = self.make_client(lambda r: httpx.Response(200, json={"ok": True}))
        self.assertEqual(await client.call("/api/wishlist"), {"ok": True})
        self.assertEqual(self.requests[0].headers[USER_ID_HEADER], "u-1")

    async def test_identity_header_omitted_when_anonymous(self) -> None:
        client = self.make_client(lambda r: httpx.Response(200, json=[]))
        await client.call("/")
        self.assertNotIn(USER_ID_HEADER, self.requests[0].headers)

    async def test_unauthorized_means_session_expired(self) -> None:
        client = self.make_client(lambda r: httpx.Response(401, json={"detail": "Authentication required"}))
        with self.assertRaises(SessionExpiredError):
            await client.call("/api/tests")

    async def test_error_body_message_is_used(self) -> None:
        client = self.make_client(lambda r: httpx.Response(409, json={"detail": "Test already in progress for this product"}))
        with self.assertRaises(RequestError) as ctx:
            await client.call("/api/tests", method="POST", json={"item_id": "p-1"})
        self.assertEqual(ctx.exception.status, 409)
        self.assertEqual(str(ctx.exception), "Test already in progress for this product")

    async def test_legacy_error_key_is_used(self) -> None:
        client = self.make_client(lambda r: httpx.Response(400, json={"error": "Product ID is required"}))
        with self.assertRaises(RequestError) as ctx:
            await client.call("/api/tests", method="POST", json={})
        self.assertEqual(ctx.exception.message, "Product ID is required")

    async def test_non_json_error_gets_generic_message(self) -> None:
        client = self.make_client(
            lambda r: httpx.Response(502, text="<html>Bad gateway</html>", headers={"content-type": "text/html"})
        )
        with self.assertRaises(RequestError) as ctx:
            await client.call("/api/tests")
        self.assertEqual(ctx.exception.message, "Request failed with status 502")
        self.assertEqual(ctx.exception.category, RETRY)

    async def test_success_with_html_is_protocol_error(self) -> None:
        client = self.make_client(
            lambda r: httpx.Response(200, text="<html>login page</html>", headers={"content-type": "text/html"})
        )
        with self.assertRaises(ProtocolError):
            await client.call("/api/ingredient-reactions")

    async def test_success_with_malformed_json_is_protocol_error(self) -> None:
        client = self.make_client(
            lambda r: httpx.Response(200, content=b"{not json", headers={"content-type": "application/json"})
        )
        with self.assertRaises(ProtocolError):
            await client.call("/api/tests")

    async def test_network_failure_is_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = self.make_client(handler)
        with self.assertRaises(TransportError) as ctx:
            await client.call("/api/tests")
        self.assertEqual(ctx.exception.category, RETRY)

    async def test_no_automatic_retry(self) -> None:
        client = self.make_client(lambda r: httpx.Response(503, json={"detail": "down"}))
        with self.assertRaises(RequestError):
            await client.call("/api/tests")
        self.assertEqual(len(self.requests), 1)


class TestDiagnose(GatewayTestCase):
    async def test_reports_reachability_and_identity(self) -> None:
        self.session.save({"id": "u-1", "email": "a@b.com"})
        client = self.make_client(lambda r: httpx.Response(200, json={"message": "ok"}))
        report = await client.diagnose()
        self.assertTrue(report["reachable"])
        self.assertEqual(report["status"], 200)
        self.assertEqual(report["user_id"], "u-1")

    async def test_never_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("offline", request=request)

        client = self.make_client(handler)
        report = await client.diagnose()
        self.assertFalse(report["reachable"])
        self.assertIn("offline", report["error"])


class TestTypedWrappers(GatewayTestCase):
    async def test_login_reconciles_legacy_id_into_session(self) -> None:
        client = self.make_client(
            lambda r: httpx.Response(200, json={"user": {"_id": "abc123", "email": "a@b.com", "name": "A"}})
        )
        identity = await client.login("a@b.com", "secret")
        self.assertEqual(identity.id, "abc123")
        self.assertEqual(self.session.load().id, "abc123")
        body = json.loads(self.requests[0].content)
        self.assertEqual(body, {"email": "a@b.com", "password": "secret"})
        self.assertEqual(self.requests[0].url.path, "/api/auth/login")

    async def test_login_without_any_id_persists_nothing(self) -> None:
        client = self.make_client(lambda r: httpx.Response(200, json={"user": {"email": "a@b.com"}}))
        with self.assertRaises(MissingIdentityError):
            await client.login("a@b.com", "secret")
        self.assertIsNone(self.session.load())

    async def test_login_without_user_is_protocol_error(self) -> None:
        client = self.make_client(lambda r: httpx.Response(200, json={"token": "x"}))
        with self.assertRaises(ProtocolError):
            await client.login("a@b.com", "secret")

    async def test_logout_clears_session(self) -> None:
        self.session.save({"id": "u-1", "email": "a@b.com"})
        client = self.make_client(lambda r: httpx.Response(200, json={}))
        client.logout()
        self.assertIsNone(self.session.load())

    async def test_start_and_complete_test(self) -> None:
        self.session.save({"id": "u-1", "email": "a@b.com"})
        record = {
            "id": "t-1",
            "user_id": "u-1",
            "item_id": "item42",
            "start_date": "2026-01-01T00:00:00Z",
            "finish_date": "2026-01-04T00:00:00Z",
            "completed": False,
            "result": None,
        }

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                return httpx.Response(201, json=record)
            return httpx.Response(200, json={**record, "completed": True, "result": "Safe"})

        client = self.make_client(handler)
        started = await client.start_test("item42")
        self.assertFalse(started.completed)
        done = await client.complete_test(started.id, "Safe")
        self.assertTrue(done.completed)
        self.assertEqual(done.result, "Safe")
        self.assertEqual(self.requests[1].url.path, "/api/tests/t-1")

    async def test_ingredient_name_is_path_encoded(self) -> None:
        self.session.save({"id": "u-1", "email": "a@b.com"})
        client = self.make_client(lambda r: httpx.Response(200, json={"status": "ok"}))
        await client.delete_ingredient_reaction("sodium lauryl/sulfate")
        self.assertEqual(self.requests[0].url.raw_path, b"/api/ingredient-reactions/sodium%20lauryl%2Fsulfate")

    async def test_unexpected_list_shape_is_protocol_error(self) -> None:
        self.session.save({"id": "u-1", "email": "a@b.com"})
        client = self.make_client(lambda r: httpx.Response(200, json=[{"id": "x"}]))
        with self.assertRaises(ProtocolError):
            await client.get_product_reactions()

    async def test_update_trial_period_refreshes_session(self) -> None:
        self.session.save({"id": "u-1", "email": "a@b.com"})
        user = {
            "id": "u-1",
            "_id": "legacy",
            "email": "a@b.com",
            "name": "A",
            "trial_period_days": 10,
            "created_at": "2026-01-01T00:00:00Z",
            "updated_at": "2026-01-02T00:00:00Z",
        }
        client = self.make_client(lambda r: httpx.Response(200, json=user))
        updated = await client.update_trial_period(10)
        self.assertEqual(updated.trial_period_days, 10)
        self.assertEqual(self.session.load().trial_period_days, 10)


if __name__ == "__main__":
    unittest.main()
