# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from datetime import timedelta
from pathlib import Path
from uuid import uuid4

import httpx


class TestClientAgainstServer(unittest.IsolatedAsyncioTestCase):
    """Device client talking to the real app through an in-process transport."""

    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="sensitivv-test-"))
        os.environ["SENSITIVV_DATA_ROOT"] = str(cls._tmp / "data")
        os.environ["SENSITIVV_DB_PATH"] = str(cls._tmp / "data" / "sensitivv.db")

        for name in list(sys.modules.keys()):
            if name == "sensitivv" or name.startswith("sensitivv."):
                sys.modules.pop(name, None)

        from sensitivv import errors  # noqa: WPS433
        from sensitivv.api import app  # noqa: WPS433
        from sensitivv.client import ApiClient, FileSecureStorage, SessionStore  # noqa: WPS433

        cls.errors = errors
        cls.app = app
        cls.ApiClient = ApiClient
        cls.FileSecureStorage = FileSecureStorage
        cls.SessionStore = SessionStore

    @classmethod
    def tearDownClass(cls) -> None:
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def setUp(self) -> None:
        session_dir = self._tmp / "device" / uuid4().hex
        self.session = self.SessionStore(self.FileSecureStorage(session_dir))
        self.api = self.ApiClient(
            self.session,
            base_url="http://sensitivv.local",
            transport=httpx.ASGITransport(app=self.app),
        )

    async def test_signup_login_and_test_lifecycle(self) -> None:
        email = f"{uuid4().hex[:10]}@example.com"
        identity = await self.api.signup(name="Ana", email=email, password="password123", language="es")
        self.assertEqual(self.session.load().id, identity.id)
        self.assertEqual(identity.language, "es")

        self.api.logout()
        self.assertFalse(self.session.is_logged_in())
        with self.assertRaises(self.errors.SessionExpiredError):
            await self.api.get_tests()

        identity = await self.api.login(email, "password123")
        self.assertTrue(identity.legacy_id)

        test = await self.api.start_test("item42")
        self.assertEqual(test.item_id, "item42")
        with self.assertRaises(self.errors.RequestError) as ctx:
            await self.api.start_test("item42")
        self.assertEqual(ctx.exception.status, 409)

        done = await self.api.complete_test(test.id, "Safe")
        self.assertTrue(done.completed)
        self.assertEqual(done.result, "Safe")

        tests = await self.api.get_tests()
        self.assertEqual([t.id for t in tests], [test.id])

    async def test_reactions_wishlist_and_notes(self) -> None:
        await self.api.signup(name="Bo", email=f"{uuid4().hex[:10]}@example.com", password="password123")

        await self.api.save_product_reaction("p-1", "mild")
        await self.api.save_product_reaction("p-1", "severe")
        reactions = await self.api.get_product_reactions()
        self.assertEqual([(r.product_id, r.reaction) for r in reactions], [("p-1", "severe")])
        await self.api.delete_product_reaction("p-1")
        await self.api.delete_product_reaction("p-1")
        self.assertEqual(await self.api.get_product_reactions(), [])

        await self.api.save_ingredient_reaction("fragrance / parfum", "hives")
        await self.api.delete_ingredient_reaction("fragrance / parfum")
        self.assertEqual(await self.api.get_ingredient_reactions(), [])

        item = await self.api.add_to_wishlist("p-2")
        self.assertEqual(len(await self.api.get_wishlist()), 1)
        await self.api.remove_from_wishlist(item.id)
        with self.assertRaises(self.errors.RequestError) as ctx:
            await self.api.remove_from_wishlist(item.id)
        self.assertEqual(ctx.exception.status, 404)

        note = await self.api.add_product_note("p-3", "burning", rating=1)
        note = await self.api.update_product_note(note.id, "ok after a week")
        self.assertEqual(note.rating, 1)
        self.assertEqual(len(await self.api.get_product_notes()), 1)

    async def test_history_articles_and_ingredients(self) -> None:
        await self.api.signup(name="Ed", email=f"{uuid4().hex[:10]}@example.com", password="password123")

        entry = await self.api.add_history("p-6", action="scanned")
        self.assertEqual(entry.action, "scanned")
        history = await self.api.get_history()
        self.assertEqual([h.id for h in history], [entry.id])
        self.assertEqual(len(await self.api.get_history(limit=1)), 1)

        title = f"Fragrance allergies {uuid4().hex[:6]}"
        article = await self.api.add_article(title, "Fragrance is a common irritant.")
        self.assertIn(article.id, [a.id for a in await self.api.get_articles()])

        product = f"p-{uuid4().hex[:6]}"
        await self.api.add_product_ingredient(product, "limonene")
        with self.assertRaises(self.errors.RequestError) as ctx:
            await self.api.add_product_ingredient(product, "limonene")
        self.assertEqual(ctx.exception.status, 409)
        ingredients = await self.api.get_product_ingredients(product)
        self.assertEqual([i.ingredient_name for i in ingredients], ["limonene"])

    async def test_profile_and_trial_period(self) -> None:
        identity = await self.api.signup(name="Cy", email=f"{uuid4().hex[:10]}@example.com", password="password123")
        profile = await self.api.get_profile()
        self.assertEqual(profile.id, identity.id)
        updated = await self.api.update_trial_period(12)
        self.assertEqual(updated.trial_period_days, 12)
        self.assertEqual(self.session.load().trial_period_days, 12)

    async def test_stale_session_is_rejected(self) -> None:
        self.session.save({"id": "gone", "email": "gone@example.com"})
        with self.assertRaises(self.errors.RequestError) as ctx:
            await self.api.get_wishlist()
        self.assertEqual(ctx.exception.status, 403)

    async def test_test_duration(self) -> None:
        await self.api.signup(name="Di", email=f"{uuid4().hex[:10]}@example.com", password="password123")
        test = await self.api.start_test("p-5")
        from datetime import datetime  # noqa: WPS433

        start = datetime.fromisoformat(test.start_date.replace("Z", "+00:00"))
        finish = datetime.fromisoformat(test.finish_date.replace("Z", "+00:00"))
        self.assertEqual(finish - start, timedelta(days=3))


if __name__ == "__main__":
    unittest.main()
